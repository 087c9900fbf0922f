"""
Team Stats Pipeline Base

Shared flow for the per-domain team stat pipelines (hitting, pitching,
fielding, curious facts). Each domain contributes up to two sources into
the same team_stats rows:

1. Authoritative season totals from the MLB team feed (optional per
   domain), written as `total`, with gamesPlayed stored on the team.
2. One TeamRankings page per metric, written as per-game splits. Metrics
   that only exist per game get a derived total (games x current average).

Every fetch is its own unit of work: a page that cannot be fetched is
skipped and the remaining pages still commit.
"""

from typing import ClassVar, Mapping, Optional

from core.resilience import TRANSPORT_ERRORS
from core.settings import settings
from db.models.enums import StatPerspective
from db.models.team_stats import TeamStat
from db.models.teams import Team
from pipelines.base import BasePipeline
from pipelines.context import PipelineContext
from pipelines.extractors import MLBStatsExtractor, TeamRankingsExtractor
from pipelines.maps import DERIVED_TOTAL_METRICS, GAMES_KEY
from pipelines.transformers import derive_total, map_record_fields, parse_int, split_perspective
from pipelines.transformers.tables import SplitRow


class TeamStatsPipeline(BasePipeline):
    """
    Base class for team stat pipelines.

    Subclasses set:
    - config: PipelineConfig
    - category: Stat category name the metrics are filed under
    - pages: Metric key -> TeamRankings page slug
    - totals_group: MLB stat group for the totals feed, or None
    - totals_fields: JSON field -> metric key for the totals feed
    """

    category: ClassVar[str]
    pages: ClassVar[Mapping[str, str]] = {}
    totals_group: ClassVar[Optional[str]] = None
    totals_fields: ClassVar[Mapping[str, str]] = {}

    def __init__(
        self,
        mlb_extractor: Optional[MLBStatsExtractor] = None,
        team_rankings_extractor: Optional[TeamRankingsExtractor] = None,
    ):
        super().__init__()
        self.mlb_extractor = mlb_extractor or MLBStatsExtractor()
        self.team_rankings_extractor = team_rankings_extractor or TeamRankingsExtractor()

    def execute(self, ctx: PipelineContext) -> None:
        """Import totals (when the domain has a feed), then every page."""
        if self.totals_group:
            self.import_totals(ctx)

        ctx.log.info("importing_pages", category=self.category, pages=len(self.pages))
        for key, slug in self.pages.items():
            self.import_page(ctx, key, slug)

    # -- authoritative totals ------------------------------------------------

    def import_totals(self, ctx: PipelineContext) -> None:
        """Write MLB season totals for every team as one batch."""
        try:
            records = self.mlb_extractor.get_team_stats(self.totals_group, settings.season)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(f"{self.totals_group}_totals", e)
            return

        with self.unit_of_work():
            for record in records:
                team_id = self.registry.ensure_team_id(record.get("teamName"))
                if team_id is None:
                    ctx.log.warning("team_unresolved", source="mlb_stats", team=record.get("teamName"))
                    continue

                values = map_record_fields(record, self.totals_fields)
                games = values.pop(GAMES_KEY, None)
                if games is not None:
                    Team.set_games(team_id, parse_int(games))

                for metric, total in values.items():
                    stat_type_id = self.registry.ensure_stat_type_id(metric, self.category)
                    TeamStat.merge_totals(team_id, stat_type_id, total)
                    ctx.increment_records()

        ctx.log.info("totals_imported", group=self.totals_group, teams=len(records))

    # -- per-game pages ------------------------------------------------------

    def import_page(self, ctx: PipelineContext, key: str, slug: str) -> None:
        """Write one metric page's splits for every team on it."""
        try:
            rows = self.team_rankings_extractor.get_stat_rows(slug)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(slug, e)
            return

        metric, perspective = split_perspective(key, self.pages)
        with self.unit_of_work():
            stat_type_id = self.registry.ensure_stat_type_id(metric, self.category)
            for row in rows:
                team_id = self.registry.ensure_team_id(row.team)
                if team_id is None:
                    ctx.log.warning("team_unresolved", source="team_rankings", team=row.team)
                    continue

                record = TeamStat.merge_splits(team_id, stat_type_id, row.splits(), perspective)
                if metric in DERIVED_TOTAL_METRICS and perspective is StatPerspective.OWN:
                    self.write_derived_total(ctx, record, team_id, metric, row)
                ctx.increment_records()

    def write_derived_total(
        self,
        ctx: PipelineContext,
        record: TeamStat,
        team_id: int,
        metric: str,
        row: SplitRow,
    ) -> None:
        """Set total = games x current average when both are known."""
        games = Team.get_by_id(team_id).games
        total = derive_total(games, row.current_season, settings.derived_total_precision)
        if total is None:
            ctx.log.warning(
                "team_games_unknown",
                team=row.team,
                stat=metric,
                games=games,
                current=row.current_season,
            )
            return
        TeamStat.merge_totals(team_id, record.stat_type_id, total, record.perspective)
