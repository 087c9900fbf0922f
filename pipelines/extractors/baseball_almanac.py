"""
Baseball Almanac Extractor

Scrapes a team's season pages: per-player fielding lines, and the schedule
page's game log and record splits. The fielding page holds several tables
with varying headers, so its data table is found by header discovery
rather than position.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from core.resilience import baseball_almanac_circuit
from core.settings import settings
from pipelines.extractors.base import BaseExtractor
from pipelines.maps import (
    FIELDING_HEADER_SYNONYMS,
    FIELDING_IDENTITY_KEY,
    FIELDING_METRICS,
    FIELDING_ROLE_KEY,
)
from pipelines.transformers.schedule import TeamSchedule, parse_team_schedule_page
from pipelines.transformers.tables import LocatedTable, locate_table
from pipelines.transformers.values import parse_number


FIELDING_URL = "https://www.baseball-almanac.com/teamstats/fielding.php?y={season}&t={code}"
SCHEDULE_URL = "https://www.baseball-almanac.com/teamstats/schedule.php?y={season}&t={code}"
ALMANAC_REFERER = "https://www.baseball-almanac.com/teammenu.shtml"


@dataclass(frozen=True)
class FieldingRow:
    """One player's fielding line at one position (or slash-joined positions)."""

    name: str
    position: str
    values: dict[str, Optional[float]] = field(default_factory=dict)


def fielding_rows_from_table(table: LocatedTable) -> list[FieldingRow]:
    """Convert located rows into FieldingRows with parsed metric values."""
    rows = []
    for located in table.rows:
        values = {
            metric: parse_number(located.cells.get(metric))
            for metric in FIELDING_METRICS
            if metric in table.columns
        }
        rows.append(
            FieldingRow(
                name=located.identity,
                position=located.cells.get(FIELDING_ROLE_KEY) or "",
                values=values,
            )
        )
    return rows


def parse_fielding_page(html: str) -> list[FieldingRow]:
    """Locate the fielding table in a page and decode its rows."""
    column_synonyms = {
        key: synonyms
        for key, synonyms in FIELDING_HEADER_SYNONYMS.items()
        if key != FIELDING_IDENTITY_KEY
    }
    table = locate_table(
        html,
        identity_synonyms=FIELDING_HEADER_SYNONYMS[FIELDING_IDENTITY_KEY],
        column_synonyms=column_synonyms,
        scored_keys=FIELDING_METRICS,
    )
    return fielding_rows_from_table(table)


class BaseballAlmanacExtractor(BaseExtractor):
    """Extractor for Baseball Almanac team fielding and schedule pages."""

    def __init__(self, client=None):
        super().__init__(
            "baseball_almanac",
            client=client,
            # Browser UA and referrer are required by the site
            headers={
                "User-Agent": settings.http_user_agent,
                "Referer": ALMANAC_REFERER,
                "Accept": "text/html,application/xhtml+xml",
            },
            circuit_breaker=baseball_almanac_circuit,
        )

    def extract(self, **kwargs: Any) -> Any:
        """Not used directly - use get_fielding_rows or get_team_schedule."""
        raise NotImplementedError("Use get_fielding_rows or get_team_schedule")

    def get_fielding_rows(self, team_code: str, season: Optional[int] = None) -> list[FieldingRow]:
        """
        Fetch a team's fielding page.

        Args:
            team_code: Baseball Almanac team code (e.g. "TOR")
            season: Season year (defaults to settings.season)

        Returns:
            Fielding rows in page order; [] when no table qualifies
        """
        season = season or settings.season
        url = FIELDING_URL.format(season=season, code=team_code)
        html = self.client.get_text(url)

        rows = parse_fielding_page(html)
        if not rows:
            self.log.warning("fielding_table_not_found", team_code=team_code, season=season)
        self.log.debug("fielding_rows_fetched", team_code=team_code, count=len(rows))
        return rows

    def get_team_schedule(self, team_code: str, season: Optional[int] = None) -> TeamSchedule:
        """
        Fetch a team's schedule page.

        Returns:
            Game log plus monthly and opponent record splits; parts missing
            from the page come back empty
        """
        season = season or settings.season
        url = SCHEDULE_URL.format(season=season, code=team_code.upper())
        schedule = parse_team_schedule_page(self.client.get_text(url))

        if not schedule.games:
            self.log.warning("schedule_table_not_found", team_code=team_code, season=season)
        self.log.debug(
            "team_schedule_fetched",
            team_code=team_code,
            games=len(schedule.games),
            monthly=len(schedule.monthly),
            opponents=len(schedule.opponents),
        )
        return schedule
