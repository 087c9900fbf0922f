"""
Matches Pipeline

Imports regular-season games day by day from the MLB Stats API schedule,
hydrated with line scores. Matches are upserted by gamePk and their innings
by (match, inning), so rerunning a range refreshes results in place.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

import pytz

from core.resilience import TRANSPORT_ERRORS
from core.settings import settings
from db.models.matches import Match, MatchInning
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors import MLBStatsExtractor, ScheduleGame


def default_end_date(timezone: Optional[str] = None) -> date:
    """Yesterday in the schedule timezone; today's games may still be in progress."""
    tz = pytz.timezone(timezone or settings.schedule_timezone)
    return datetime.now(tz).date() - timedelta(days=1)


def days_between(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start to end, inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


class MatchesPipeline(BasePipeline):
    """
    Fetch and store games with league records and line scores.

    One calendar day is one unit of work: its games commit together and a
    failed fetch skips only that day.
    """

    config = PipelineConfig(
        name="matches",
        display_name="Matches",
        description="Daily regular-season schedule with league records and line scores",
        target_table="matches",
        source="MLB Stats",
    )

    def __init__(
        self,
        mlb_extractor: Optional[MLBStatsExtractor] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ):
        super().__init__()
        self.mlb_extractor = mlb_extractor or MLBStatsExtractor()
        self.start_date = start_date
        self.end_date = end_date

    def execute(self, ctx: PipelineContext) -> None:
        start = self.start_date or settings.schedule_start_date
        end = self.end_date or default_end_date()
        if start > end:
            ctx.log.info("no_days_to_import", start=start.isoformat(), end=end.isoformat())
            return

        ctx.log.info("importing_matches", start=start.isoformat(), end=end.isoformat())
        for day in days_between(start, end):
            self.import_day(ctx, day)

    def import_day(self, ctx: PipelineContext, day: date) -> None:
        try:
            games = self.mlb_extractor.get_schedule(day)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(day.isoformat(), e)
            return

        with self.unit_of_work():
            for game in games:
                self.store_game(game)
                ctx.increment_records()

        ctx.log.debug("day_imported", day=day.isoformat(), games=len(games))

    def store_game(self, game: ScheduleGame) -> Match:
        match = Match.upsert_from_schedule(
            game.game_pk,
            game.date,
            home_team=self.registry.ensure_team_id(game.home.team),
            away_team=self.registry.ensure_team_id(game.away.team),
            venue=game.venue,
            home_wins=game.home.wins,
            home_losses=game.home.losses,
            home_pct=game.home.pct,
            away_wins=game.away.wins,
            away_losses=game.away.losses,
            away_pct=game.away.pct,
            home_runs=game.home.runs,
            home_hits=game.home.hits,
            home_errors=game.home.errors,
            away_runs=game.away.runs,
            away_hits=game.away.hits,
            away_errors=game.away.errors,
        )
        for inning in game.innings:
            MatchInning.upsert(match.id, inning.number, inning.home, inning.away)
        return match
