"""
Data Extractors

Reusable components for fetching data from external sources.
"""

from pipelines.extractors.base import BaseExtractor
from pipelines.extractors.mlb_stats import (
    InningLine,
    MLBStatsExtractor,
    RosterEntry,
    ScheduleGame,
    ScheduleSide,
)
from pipelines.extractors.team_rankings import TeamRankingsExtractor
from pipelines.extractors.baseball_almanac import BaseballAlmanacExtractor, FieldingRow

__all__ = [
    "BaseExtractor",
    "MLBStatsExtractor",
    "RosterEntry",
    "ScheduleGame",
    "ScheduleSide",
    "InningLine",
    "TeamRankingsExtractor",
    "BaseballAlmanacExtractor",
    "FieldingRow",
]
