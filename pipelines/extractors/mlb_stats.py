"""
MLB Stats Extractor

Fetches JSON from the MLB stats feeds:

- bdfed (the feed behind mlb.com stat pages) for team and player season
  totals, one JSON record per subject under "stats",
- statsapi for 40-man rosters, one entry per player under "roster", and
  for the daily regular-season schedule with line scores ("dates" -> "games").
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

import pytz

from core.resilience import PayloadError, mlb_stats_circuit
from core.settings import settings
from pipelines.extractors.base import BaseExtractor
from pipelines.transformers.values import clean_text, parse_int, parse_number


BDFED_BASE = "https://bdfed.stitch.mlbinfra.com/bdfed/stats"
TEAM_STATS_URL = (
    BDFED_BASE + "/team?stitch_env=prod&sportId=1&gameType=R&group={group}"
    "&stats=season&season={season}&limit=30&offset=0"
)
PLAYER_STATS_URL = (
    BDFED_BASE + "/player?stitch_env=prod&sportId=1&gameType=R&group={group}"
    "&stats=season&season={season}&playerPool=ALL&limit=1000&offset=0"
)
ROSTER_URL = "https://statsapi.mlb.com/api/v1/teams/{team_id}/roster?rosterType=40Man&season={season}"
SCHEDULE_URL = (
    "https://statsapi.mlb.com/api/v1/schedule?sportId=1&date={day}&gameType=R&hydrate=linescore"
)

STAT_GROUPS = ("hitting", "pitching")


@dataclass(frozen=True)
class RosterEntry:
    """One player of a team's 40-man roster."""

    mlb_player_id: int
    name: str
    number: Optional[str] = None
    position: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class ScheduleSide:
    """One team's side of a scheduled game: league record and R/H/E totals."""

    team: str
    wins: Optional[int] = None
    losses: Optional[int] = None
    pct: Optional[float] = None
    runs: Optional[int] = None
    hits: Optional[int] = None
    errors: Optional[int] = None


@dataclass(frozen=True)
class InningLine:
    number: int
    home: tuple[Optional[int], Optional[int], Optional[int]]
    away: tuple[Optional[int], Optional[int], Optional[int]]


@dataclass(frozen=True)
class ScheduleGame:
    """A game from the statsapi schedule, hydrated with its line score."""

    game_pk: int
    date: datetime
    home: ScheduleSide
    away: ScheduleSide
    venue: Optional[str] = None
    innings: tuple[InningLine, ...] = ()


def _records(payload: Any, key: str, url: str) -> list[dict]:
    if not isinstance(payload, dict):
        raise PayloadError(f"Expected a JSON object from {url}")
    records = payload.get(key)
    if not isinstance(records, list):
        raise PayloadError(f"Missing '{key}' array in response from {url}")
    return [record for record in records if isinstance(record, dict)]


def _rhe(line: Any) -> tuple[Optional[int], Optional[int], Optional[int]]:
    """(runs, hits, errors) of a line score object; absent values are None."""
    if not isinstance(line, dict):
        return None, None, None
    return parse_int(line.get("runs")), parse_int(line.get("hits")), parse_int(line.get("errors"))


def parse_game_date(value: Any, day: date) -> datetime:
    """
    Naive UTC start time from a statsapi gameDate such as
    "2025-03-27T17:05:00Z"; midnight of the requested day if unreadable.
    """
    text = clean_text(value if isinstance(value, str) else "")
    if text:
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(pytz.utc).replace(tzinfo=None)
            return parsed
    return datetime(day.year, day.month, day.day)


def _schedule_side(game: dict, linescore: dict, side: str) -> ScheduleSide:
    entry = (game.get("teams") or {}).get(side) or {}
    record = entry.get("leagueRecord") or {}
    runs, hits, errors = _rhe((linescore.get("teams") or {}).get(side))
    return ScheduleSide(
        team=clean_text((entry.get("team") or {}).get("name")),
        wins=parse_int(record.get("wins")),
        losses=parse_int(record.get("losses")),
        pct=parse_number(record.get("pct")),
        runs=runs,
        hits=hits,
        errors=errors,
    )


def parse_schedule_game(game: dict, day: date) -> Optional[ScheduleGame]:
    """Decode one statsapi schedule game; None if it has no gamePk."""
    game_pk = parse_int(game.get("gamePk"))
    if game_pk is None:
        return None

    linescore = game.get("linescore")
    if not isinstance(linescore, dict):
        linescore = {}

    innings = []
    for inning in linescore.get("innings") or []:
        if not isinstance(inning, dict):
            continue
        number = parse_int(inning.get("num"))
        if number is None:
            continue
        innings.append(
            InningLine(number=number, home=_rhe(inning.get("home")), away=_rhe(inning.get("away")))
        )

    venue = clean_text((game.get("venue") or {}).get("name")) or None

    return ScheduleGame(
        game_pk=game_pk,
        date=parse_game_date(game.get("gameDate"), day),
        home=_schedule_side(game, linescore, "home"),
        away=_schedule_side(game, linescore, "away"),
        venue=venue,
        innings=tuple(innings),
    )


def parse_roster_entry(item: dict) -> Optional[RosterEntry]:
    """Decode a statsapi roster item; None if it lacks a person id or name."""
    person = item.get("person") or {}
    mlb_player_id = parse_int(person.get("id"))
    name = clean_text(person.get("fullName"))
    if mlb_player_id is None or not name:
        return None

    number = clean_text(str(item.get("jerseyNumber") or "")) or None
    position = clean_text((item.get("position") or {}).get("abbreviation")) or None
    status = clean_text((item.get("status") or {}).get("code")) or None

    return RosterEntry(
        mlb_player_id=mlb_player_id,
        name=name,
        number=number,
        position=position,
        status=status,
    )


class MLBStatsExtractor(BaseExtractor):
    """
    Extractor for MLB season totals, rosters and daily schedules.

    Every method is one unit of work for its pipeline: any failure raises a
    TransportError (PayloadError for an unexpected body shape).
    """

    def __init__(self, client=None):
        super().__init__("mlb_stats", client=client, circuit_breaker=mlb_stats_circuit)

    def extract(self, **kwargs: Any) -> Any:
        """Not used directly - use specific methods below."""
        raise NotImplementedError("Use get_team_stats, get_player_stats, get_roster or get_schedule")

    def get_team_stats(self, group: str, season: Optional[int] = None) -> list[dict]:
        """
        Fetch team season totals.

        Args:
            group: "hitting" or "pitching"
            season: Season year (defaults to settings.season)

        Returns:
            One record per team (fields as published, e.g. teamName, atBats)
        """
        if group not in STAT_GROUPS:
            raise ValueError(f"Unknown stat group '{group}'")
        url = TEAM_STATS_URL.format(group=group, season=season or settings.season)

        records = _records(self.client.get_json(url), "stats", url)
        self.log.info("team_stats_fetched", group=group, count=len(records))
        return records

    def get_player_stats(self, group: str, season: Optional[int] = None) -> list[dict]:
        """Fetch player season totals for a stat group (one record per player)."""
        if group not in STAT_GROUPS:
            raise ValueError(f"Unknown stat group '{group}'")
        url = PLAYER_STATS_URL.format(group=group, season=season or settings.season)

        records = _records(self.client.get_json(url), "stats", url)
        self.log.info("player_stats_fetched", group=group, count=len(records))
        return records

    def get_roster(self, team_id: int, season: Optional[int] = None) -> list[RosterEntry]:
        """
        Fetch a team's 40-man roster.

        Args:
            team_id: MLB Stats API team id
            season: Season year (defaults to settings.season)

        Returns:
            Decoded roster entries; items without an id or name are dropped
        """
        url = ROSTER_URL.format(team_id=team_id, season=season or settings.season)

        entries = []
        for item in _records(self.client.get_json(url), "roster", url):
            entry = parse_roster_entry(item)
            if entry is None:
                self.log.debug("roster_entry_skipped", team_id=team_id)
                continue
            entries.append(entry)

        self.log.info("roster_fetched", team_id=team_id, count=len(entries))
        return entries

    def get_schedule(self, day: date) -> list[ScheduleGame]:
        """
        Fetch one day's regular-season games with their line scores.

        Args:
            day: Calendar day to fetch

        Returns:
            Decoded games; [] for a day without games. Games without a
            gamePk are dropped.
        """
        url = SCHEDULE_URL.format(day=day.isoformat())
        payload = self.client.get_json(url)
        if not isinstance(payload, dict):
            raise PayloadError(f"Expected a JSON object from {url}")

        games = []
        for entry in payload.get("dates") or []:
            if not isinstance(entry, dict):
                continue
            for item in entry.get("games") or []:
                if not isinstance(item, dict):
                    continue
                game = parse_schedule_game(item, day)
                if game is None:
                    self.log.debug("schedule_game_skipped", day=day.isoformat())
                    continue
                games.append(game)

        self.log.info("schedule_fetched", day=day.isoformat(), count=len(games))
        return games
