"""
Team Pitching Pipeline

Season pitching totals from the MLB team feed plus per-9 and per-game
pitching averages from TeamRankings.
"""

from pipelines.config import PipelineConfig
from pipelines.maps import PITCHING, TEAM_PITCHING_FIELDS, TEAM_RANKINGS_PITCHING
from pipelines.team_stats import TeamStatsPipeline


class TeamPitchingPipeline(TeamStatsPipeline):
    """Fetch and store team pitching stats."""

    config = PipelineConfig(
        name="team_pitching",
        display_name="Team Pitching",
        description="Season pitching totals and per-game pitching averages for all 30 teams",
        target_table="team_stats",
        source="MLB Stats, TeamRankings",
        depends_on=("team_hitting",),
    )

    category = PITCHING
    pages = TEAM_RANKINGS_PITCHING
    totals_group = "pitching"
    totals_fields = TEAM_PITCHING_FIELDS
