"""Stub extractors for pipeline tests.

Each stub returns canned rows per unit and raises a transport error for
the units listed in `failing`.
"""
from __future__ import annotations

from typing import Iterable, Optional

import pytest

from core.resilience import NetworkError
from pipelines.transformers.schedule import TeamSchedule


class StubTeamRankings:
    def __init__(self, pages: Optional[dict] = None, trends: Optional[dict] = None, failing: Iterable[str] = ()):
        self.pages = pages or {}
        self.trends = trends or {}
        self.failing = set(failing)
        self.calls: list[str] = []

    def _check(self, unit: str) -> None:
        self.calls.append(unit)
        if unit in self.failing:
            raise NetworkError(f"Request timed out: {unit}")

    def get_stat_rows(self, slug: str) -> list:
        self._check(slug)
        return self.pages.get(slug, [])

    def get_win_trend_rows(self, code: str) -> list:
        self._check(code)
        return self.trends.get(code, [])


class StubMLB:
    def __init__(
        self,
        team_stats: Optional[dict] = None,
        player_stats: Optional[dict] = None,
        rosters: Optional[dict] = None,
        schedules: Optional[dict] = None,
        failing: Iterable = (),
    ):
        self.team_stats = team_stats or {}
        self.player_stats = player_stats or {}
        self.rosters = rosters or {}
        self.schedules = schedules or {}
        self.days: list = []
        self.failing = set(failing)

    def _check(self, unit) -> None:
        if unit in self.failing:
            raise NetworkError(f"Connection failed: {unit}")

    def get_team_stats(self, group: str, season: Optional[int] = None) -> list:
        self._check(group)
        return self.team_stats.get(group, [])

    def get_player_stats(self, group: str, season: Optional[int] = None) -> list:
        self._check(group)
        return self.player_stats.get(group, [])

    def get_roster(self, team_id: int, season: Optional[int] = None) -> list:
        self._check(team_id)
        return self.rosters.get(team_id, [])

    def get_schedule(self, day) -> list:
        self.days.append(day)
        self._check(day)
        return self.schedules.get(day, [])


class StubAlmanac:
    def __init__(
        self,
        teams: Optional[dict] = None,
        schedules: Optional[dict] = None,
        failing: Iterable[str] = (),
    ):
        self.teams = teams or {}
        self.schedules = schedules or {}
        self.failing = set(failing)

    def _check(self, team_code: str) -> None:
        if team_code in self.failing:
            raise NetworkError(f"Request timed out: {team_code}")

    def get_fielding_rows(self, team_code: str, season: Optional[int] = None) -> list:
        self._check(team_code)
        return self.teams.get(team_code, [])

    def get_team_schedule(self, team_code: str, season: Optional[int] = None) -> TeamSchedule:
        self._check(team_code)
        return self.schedules.get(team_code, TeamSchedule())


@pytest.fixture
def stub_team_rankings():
    return StubTeamRankings


@pytest.fixture
def stub_mlb():
    return StubMLB


@pytest.fixture
def stub_almanac():
    return StubAlmanac
