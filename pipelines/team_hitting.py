"""
Team Hitting Pipeline

Season hitting totals from the MLB team feed plus per-game hitting
averages from TeamRankings. Also stores each team's games played, which
the other team pipelines use for derived totals, so it runs first.
"""

from pipelines.config import PipelineConfig
from pipelines.maps import HITTING, TEAM_HITTING_FIELDS, TEAM_RANKINGS_HITTING
from pipelines.team_stats import TeamStatsPipeline


class TeamHittingPipeline(TeamStatsPipeline):
    """
    Fetch and store team hitting stats.

    This pipeline:
    1. Fetches MLB team hitting totals and stores games played per team
    2. Fetches one TeamRankings page per hitting metric
    3. Derives season totals for per-game-only metrics (S, SBA, LOB, ...)
    """

    config = PipelineConfig(
        name="team_hitting",
        display_name="Team Hitting",
        description="Season hitting totals and per-game hitting averages for all 30 teams",
        target_table="team_stats",
        source="MLB Stats, TeamRankings",
    )

    category = HITTING
    pages = TEAM_RANKINGS_HITTING
    totals_group = "hitting"
    totals_fields = TEAM_HITTING_FIELDS
