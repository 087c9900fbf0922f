"""
Player Fielding Pipeline

Per-player fielding lines from Baseball Almanac team pages. A page lists a
player once per position played; the Position-Compatibility Matcher keeps
the one row that fits the player's roster position. Players are matched to
the roster by normalized name within the team, since the page carries no
MLB id.
"""

from typing import Optional

from core.resilience import TRANSPORT_ERRORS
from core.settings import settings
from db.models.player_stats import PlayerStat
from db.models.players import Player
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors import BaseballAlmanacExtractor
from pipelines.maps import ALMANAC_TEAM_CODES, PLAYER_FIELDING
from pipelines.transformers import match_rows_to_roster


class PlayerFieldingPipeline(BasePipeline):
    """Fetch and store fielding totals for rostered players, one team per unit."""

    config = PipelineConfig(
        name="player_fielding",
        display_name="Player Fielding",
        description="Season fielding lines per rostered player",
        target_table="player_stats",
        source="Baseball Almanac",
        depends_on=("player_roster",),
    )

    def __init__(self, almanac_extractor: Optional[BaseballAlmanacExtractor] = None):
        super().__init__()
        self.almanac_extractor = almanac_extractor or BaseballAlmanacExtractor()

    def execute(self, ctx: PipelineContext) -> None:
        ctx.log.info("importing_fielding", teams=len(ALMANAC_TEAM_CODES), season=settings.season)
        for team_code, team_name in ALMANAC_TEAM_CODES.items():
            self.import_team(ctx, team_code, team_name)

    def roster_for(self, team_id: int) -> dict[str, Player]:
        """Stored roster keyed by player matching key (first player wins)."""
        roster: dict[str, Player] = {}
        for player in Player.select().where(Player.team == team_id).order_by(Player.id):
            roster.setdefault(player.name_key, player)
        return roster

    def import_team(self, ctx: PipelineContext, team_code: str, team_name: str) -> None:
        try:
            rows = self.almanac_extractor.get_fielding_rows(team_code, settings.season)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(team_code, e)
            return

        with self.unit_of_work():
            team_id = self.registry.ensure_team_id(team_name)
            roster = self.roster_for(team_id)
            if not roster:
                ctx.log.info("roster_empty", team=team_name)
                return

            selected = match_rows_to_roster(
                rows,
                {key: player.position for key, player in roster.items()},
            )
            for key, row in selected.items():
                player = roster[key]
                for metric, total in row.values.items():
                    if total is None:
                        continue
                    stat_type_id = self.registry.ensure_stat_type_id(metric, PLAYER_FIELDING)
                    PlayerStat.upsert_total(player.id, stat_type_id, total)
                    ctx.increment_records()

        ctx.log.debug("fielding_imported", team=team_name, rows=len(rows), matched=len(selected))
