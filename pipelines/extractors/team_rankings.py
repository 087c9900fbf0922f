"""
TeamRankings Extractor

Scrapes per-game team averages from teamrankings.com. Each stat page holds
one "datatable" with a fixed column layout; each win-trend page holds the
W-L record and win % of every team in one game context.
"""

from typing import Any

from core.resilience import team_rankings_circuit
from core.settings import settings
from pipelines.extractors.base import BaseExtractor
from pipelines.transformers.tables import (
    SplitRow,
    WinTrendRow,
    datatable_rows,
    parse_split_cells,
    parse_win_trend_cells,
)


TEAM_RANKINGS_BASE = "https://www.teamrankings.com/mlb"
STAT_URL = TEAM_RANKINGS_BASE + "/stat/{slug}"
WIN_TRENDS_URL = TEAM_RANKINGS_BASE + "/trends/win_trends/?sc={code}"
TEAM_RANKINGS_REFERER = TEAM_RANKINGS_BASE + "/stats/"


class TeamRankingsExtractor(BaseExtractor):
    """Extractor for TeamRankings stat and win-trend pages."""

    def __init__(self, client=None):
        super().__init__(
            "team_rankings",
            client=client,
            headers={
                "User-Agent": settings.http_user_agent,
                "Referer": TEAM_RANKINGS_REFERER,
                "Accept": "text/html,application/xhtml+xml",
            },
            circuit_breaker=team_rankings_circuit,
        )

    def extract(self, **kwargs: Any) -> Any:
        """Not used directly - use specific methods below."""
        raise NotImplementedError("Use get_stat_rows or get_win_trend_rows")

    def get_stat_rows(self, slug: str) -> list[SplitRow]:
        """
        Fetch one stat page and decode its rows.

        Args:
            slug: Page slug (e.g. "runs-per-game")

        Returns:
            One SplitRow per team; a page without the table yields []
        """
        url = STAT_URL.format(slug=slug)
        html = self.client.get_text(url)

        rows = []
        for cells in datatable_rows(html):
            row = parse_split_cells(cells)
            if row is not None:
                rows.append(row)

        if not rows:
            self.log.warning("stat_table_empty", slug=slug)
        self.log.debug("stat_rows_fetched", slug=slug, count=len(rows))
        return rows

    def get_win_trend_rows(self, code: str) -> list[WinTrendRow]:
        """Fetch one win-trend context page (e.g. code "is_after_win")."""
        url = WIN_TRENDS_URL.format(code=code)
        html = self.client.get_text(url)

        rows = []
        for cells in datatable_rows(html):
            row = parse_win_trend_cells(cells)
            if row is not None:
                rows.append(row)

        if not rows:
            self.log.warning("win_trend_table_empty", code=code)
        self.log.debug("win_trend_rows_fetched", code=code, count=len(rows))
        return rows
