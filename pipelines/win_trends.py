"""
Win Trends Pipeline

W-L record and win % of every team in each TeamRankings game context
(after a win, as home favorite, on no rest, ...). Each context is a stat
type in the WinTrends category; the "All Games" context also sets the
team's overall record and win fraction.
"""

from typing import Optional

from core.resilience import TRANSPORT_ERRORS
from db.models.team_stats import TeamStat
from db.models.teams import Team
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors import TeamRankingsExtractor
from pipelines.maps import OVERALL_WIN_TREND, TEAM_RANKINGS_WIN_TRENDS, WIN_TRENDS


class WinTrendsPipeline(BasePipeline):
    """Fetch and store per-context team records."""

    config = PipelineConfig(
        name="win_trends",
        display_name="Win Trends",
        description="Team W-L record and win % per game context",
        target_table="team_stats",
        source="TeamRankings",
    )

    def __init__(self, team_rankings_extractor: Optional[TeamRankingsExtractor] = None):
        super().__init__()
        self.team_rankings_extractor = team_rankings_extractor or TeamRankingsExtractor()

    def execute(self, ctx: PipelineContext) -> None:
        ctx.log.info("importing_win_trends", contexts=len(TEAM_RANKINGS_WIN_TRENDS))
        for context_name, code in TEAM_RANKINGS_WIN_TRENDS.items():
            self.import_context(ctx, context_name, code)

    def import_context(self, ctx: PipelineContext, context_name: str, code: str) -> None:
        """Write one context's records; a failed fetch skips the context."""
        try:
            rows = self.team_rankings_extractor.get_win_trend_rows(code)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(code, e)
            return

        with self.unit_of_work():
            stat_type_id = self.registry.ensure_stat_type_id(context_name, WIN_TRENDS)
            for row in rows:
                team_id = self.registry.ensure_team_id(row.team)
                if team_id is None:
                    ctx.log.warning("team_unresolved", source="team_rankings", team=row.team)
                    continue

                TeamStat.merge_record(team_id, stat_type_id, row.record, row.win_pct)
                if context_name == OVERALL_WIN_TREND:
                    win_fraction = row.win_pct / 100 if row.win_pct is not None else None
                    Team.set_overall_record(team_id, row.record, win_fraction)
                ctx.increment_records()
