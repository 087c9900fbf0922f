"""
Team Schedule Pipeline

Imports each team's season game log and its monthly and opponent record
splits from Baseball Almanac schedule pages.

Opponents are resolved lookup-only: a label that names no stored team keeps
its normalized text with no team link.
"""

from typing import Optional

from core.resilience import TRANSPORT_ERRORS
from core.settings import settings
from db.models.schedules import TeamGame, TeamMonthlySplit, TeamOpponentSplit
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.extractors import BaseballAlmanacExtractor
from pipelines.maps import ALMANAC_TEAM_CODES
from pipelines.transformers import normalize_team_name


class TeamSchedulePipeline(BasePipeline):
    """Fetch and store team schedules and record splits, one team per unit."""

    config = PipelineConfig(
        name="team_schedule",
        display_name="Team Schedule",
        description="Season game log plus monthly and opponent W-L splits per team",
        target_table="team_games",
        source="Baseball Almanac",
        depends_on=("team_hitting",),
    )

    def __init__(self, almanac_extractor: Optional[BaseballAlmanacExtractor] = None):
        super().__init__()
        self.almanac_extractor = almanac_extractor or BaseballAlmanacExtractor()

    def execute(self, ctx: PipelineContext) -> None:
        ctx.log.info("importing_schedules", teams=len(ALMANAC_TEAM_CODES), season=settings.season)
        for team_code, team_name in ALMANAC_TEAM_CODES.items():
            self.import_team(ctx, team_code, team_name)

    def import_team(self, ctx: PipelineContext, team_code: str, team_name: str) -> None:
        season = settings.season
        try:
            schedule = self.almanac_extractor.get_team_schedule(team_code, season)
        except TRANSPORT_ERRORS as e:
            ctx.skip_unit(team_code, e)
            return

        with self.unit_of_work():
            team_id = self.registry.ensure_team_id(team_name)

            for game in schedule.games:
                opponent = normalize_team_name(game.opponent)
                if not opponent:
                    ctx.log.debug("opponent_unusable", team=team_name, game=game.game_number)
                    continue
                TeamGame.upsert(
                    team_id=team_id,
                    season=season,
                    game_number=game.game_number,
                    game_date=game.date,
                    is_home=game.is_home,
                    opponent_name=opponent,
                    opponent_team_id=self.registry.find_team_id(opponent),
                    score=game.score or None,
                    decision=game.decision or None,
                    record=game.record or None,
                )
                ctx.increment_records()

            for split in schedule.monthly:
                TeamMonthlySplit.upsert(
                    team_id=team_id,
                    season=season,
                    month=split.label,
                    games=split.games,
                    wins=split.wins,
                    losses=split.losses,
                    win_pct=split.win_pct,
                )
                ctx.increment_records()

            for split in schedule.opponents:
                opponent = normalize_team_name(split.label)
                if not opponent:
                    continue
                TeamOpponentSplit.upsert(
                    team_id=team_id,
                    season=season,
                    opponent_name=opponent,
                    opponent_team_id=self.registry.find_team_id(opponent),
                    games=split.games,
                    wins=split.wins,
                    losses=split.losses,
                    win_pct=split.win_pct,
                )
                ctx.increment_records()

        ctx.log.debug(
            "schedule_imported",
            team=team_name,
            games=len(schedule.games),
            monthly=len(schedule.monthly),
            opponents=len(schedule.opponents),
        )
