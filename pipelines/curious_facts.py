"""
Curious Facts Pipeline

Per-inning scoring rates from TeamRankings. Most metrics come in pairs:
"YRFI" is the team's own rate and "OYRFI" the same rate for its opponents,
stored on the same stat type under the opponent perspective.
"""

from pipelines.config import PipelineConfig
from pipelines.maps import CURIOUS_FACTS, TEAM_RANKINGS_CURIOUS_FACTS
from pipelines.team_stats import TeamStatsPipeline


class CuriousFactsPipeline(TeamStatsPipeline):
    """Fetch and store per-inning scoring rates, own and opponent."""

    config = PipelineConfig(
        name="curious_facts",
        display_name="Curious Facts",
        description="First-inning and per-inning run rates, own and opponent",
        target_table="team_stats",
        source="TeamRankings",
    )

    category = CURIOUS_FACTS
    pages = TEAM_RANKINGS_CURIOUS_FACTS
