"""
Database Models

Reference data (categories, stat types, teams, players), metric values,
matches and team schedules, and the pipeline audit table.
"""

from db.models.enums import StatPerspective
from db.models.categories import StatCategory
from db.models.stat_types import StatType
from db.models.teams import Team
from db.models.players import Player
from db.models.team_stats import TeamStat
from db.models.player_stats import PlayerStat
from db.models.matches import Match, MatchInning
from db.models.schedules import TeamGame, TeamMonthlySplit, TeamOpponentSplit
from db.models.pipeline_run import PipelineRun

# Creation order follows foreign key dependencies
ALL_MODELS = [
    StatCategory,
    StatType,
    Team,
    Player,
    TeamStat,
    PlayerStat,
    Match,
    MatchInning,
    TeamGame,
    TeamMonthlySplit,
    TeamOpponentSplit,
    PipelineRun,
]

__all__ = [
    "StatPerspective",
    "StatCategory",
    "StatType",
    "Team",
    "Player",
    "TeamStat",
    "PlayerStat",
    "Match",
    "MatchInning",
    "TeamGame",
    "TeamMonthlySplit",
    "TeamOpponentSplit",
    "PipelineRun",
    "ALL_MODELS",
]
