"""
Player Roster Pipeline

Imports each team's 40-man roster from the MLB Stats API. Players are
upserted by MLB person id, so a traded player moves to the new team rather
than being duplicated. The roster position is what the player stat
pipelines use to route hitting/pitching stats and to pick fielding rows.
"""

from typing import Optional

from core.resilience import TRANSPORT_ERRORS
from core.settings import settings
from db.models.players import Player
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors import MLBStatsExtractor
from pipelines.maps import MLB_TEAM_IDS
from pipelines.transformers import normalize_player_name


class PlayerRosterPipeline(BasePipeline):
    """
    Fetch and store 40-man rosters for all 30 teams.

    One team is one unit of work: its roster commits on its own and a
    failed fetch skips only that team.
    """

    config = PipelineConfig(
        name="player_roster",
        display_name="Player Roster",
        description="40-man rosters (MLB id, number, position, status) for all 30 teams",
        target_table="players",
        source="MLB Stats",
    )

    def __init__(self, mlb_extractor: Optional[MLBStatsExtractor] = None):
        super().__init__()
        self.mlb_extractor = mlb_extractor or MLBStatsExtractor()

    def execute(self, ctx: PipelineContext) -> None:
        ctx.log.info("importing_rosters", teams=len(MLB_TEAM_IDS), season=settings.season)
        for mlb_team_id, team_name in MLB_TEAM_IDS.items():
            self.import_team(ctx, mlb_team_id, team_name)

    def import_team(self, ctx: PipelineContext, mlb_team_id: int, team_name: str) -> None:
        try:
            entries = self.mlb_extractor.get_roster(mlb_team_id, settings.season)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(team_name, e)
            return

        with self.unit_of_work():
            team_id = self.registry.ensure_team_id(team_name)
            for entry in entries:
                name_key = normalize_player_name(entry.name)
                if not name_key:
                    ctx.log.debug("player_name_unusable", mlb_player_id=entry.mlb_player_id)
                    continue

                Player.upsert_from_roster(
                    mlb_player_id=entry.mlb_player_id,
                    team_id=team_id,
                    name=entry.name,
                    name_key=name_key,
                    number=entry.number,
                    position=entry.position,
                    status=entry.status,
                )
                ctx.increment_records()

        ctx.log.debug("roster_imported", team=team_name, players=len(entries))
