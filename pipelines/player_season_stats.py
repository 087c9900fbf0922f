"""
Player Season Stats Pipeline

Season totals per player from the MLB player feed, one stat group
(hitting, pitching) per unit of work. Records are joined to the roster by
MLB person id; players not on a stored roster are ignored.

Group routing follows the roster position: pitchers only take pitching
stats, everyone else only hitting stats, and two-way players take both.
"""

from typing import Optional

from core.resilience import TRANSPORT_ERRORS
from core.settings import settings
from db.models.player_stats import PlayerStat
from db.models.players import Player
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors import MLBStatsExtractor
from pipelines.maps import (
    PLAYER_HITTING,
    PLAYER_HITTING_FIELDS,
    PLAYER_PITCHING,
    PLAYER_PITCHING_FIELDS,
)
from pipelines.transformers import map_record_fields, parse_int


PITCHER = "P"
TWO_WAY = "TWP"

# group -> (category, JSON field map)
STAT_GROUP_MAPS = {
    "hitting": (PLAYER_HITTING, PLAYER_HITTING_FIELDS),
    "pitching": (PLAYER_PITCHING, PLAYER_PITCHING_FIELDS),
}


def takes_group(position: Optional[str], group: str) -> bool:
    """Whether a player with this roster position receives a stat group."""
    role = (position or "").strip().upper()
    if role == TWO_WAY:
        return True
    if group == "pitching":
        return role == PITCHER
    return role != PITCHER


class PlayerSeasonStatsPipeline(BasePipeline):
    """
    Fetch and store season totals for rostered players.

    Depends on player_roster: only players with a stored MLB id are
    matched.
    """

    config = PipelineConfig(
        name="player_season_stats",
        display_name="Player Season Stats",
        description="Season hitting and pitching totals for rostered players",
        target_table="player_stats",
        source="MLB Stats",
        depends_on=("player_roster",),
    )

    def __init__(self, mlb_extractor: Optional[MLBStatsExtractor] = None):
        super().__init__()
        self.mlb_extractor = mlb_extractor or MLBStatsExtractor()

    def execute(self, ctx: PipelineContext) -> None:
        for group in STAT_GROUP_MAPS:
            self.import_group(ctx, group)

    def import_group(self, ctx: PipelineContext, group: str) -> None:
        category, field_map = STAT_GROUP_MAPS[group]

        try:
            records = self.mlb_extractor.get_player_stats(group, settings.season)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(f"player_{group}", e)
            return

        matched = 0
        with self.unit_of_work():
            for record in records:
                mlb_player_id = parse_int(record.get("playerId"))
                if mlb_player_id is None:
                    continue

                player = Player.find_by_mlb_id(mlb_player_id)
                if player is None or not takes_group(player.position, group):
                    continue

                matched += 1
                for metric, total in map_record_fields(record, field_map).items():
                    stat_type_id = self.registry.ensure_stat_type_id(metric, category)
                    PlayerStat.upsert_total(player.id, stat_type_id, total)
                    ctx.increment_records()

        ctx.log.info("player_group_imported", group=group, records=len(records), matched=matched)
