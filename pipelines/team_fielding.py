"""
Team Fielding Pipeline

Per-game fielding averages (double plays, errors) from TeamRankings.
There is no authoritative totals feed for team fielding.
"""

from pipelines.config import PipelineConfig
from pipelines.maps import FIELDING, TEAM_RANKINGS_FIELDING
from pipelines.team_stats import TeamStatsPipeline


class TeamFieldingPipeline(TeamStatsPipeline):
    """Fetch and store team fielding averages."""

    config = PipelineConfig(
        name="team_fielding",
        display_name="Team Fielding",
        description="Per-game fielding averages from TeamRankings",
        target_table="team_stats",
        source="TeamRankings",
    )

    category = FIELDING
    pages = TEAM_RANKINGS_FIELDING
