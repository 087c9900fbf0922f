"""
Pipeline Registry and Exports

Provides a registry of all available pipelines and helper functions
for running them by name.
"""

from typing import Type

from core.logging import get_logger
from pipelines.base import BasePipeline
from pipelines.config import PipelineConfig
from pipelines.context import PipelineContext
from pipelines.team_hitting import TeamHittingPipeline
from pipelines.team_pitching import TeamPitchingPipeline
from pipelines.team_fielding import TeamFieldingPipeline
from pipelines.curious_facts import CuriousFactsPipeline
from pipelines.win_trends import WinTrendsPipeline
from pipelines.player_roster import PlayerRosterPipeline
from pipelines.player_season_stats import PlayerSeasonStatsPipeline
from pipelines.player_fielding import PlayerFieldingPipeline
from pipelines.matches import MatchesPipeline
from pipelines.team_schedule import TeamSchedulePipeline
from schemas.pipeline import PipelineResult
from schemas.common import ApiStatus


# Registry of all available pipelines
# Order matters for run_all_pipelines - dependencies should come first
PIPELINE_REGISTRY: dict[str, Type[BasePipeline]] = {
    # Team hitting stores games played, used by derived totals downstream
    "team_hitting": TeamHittingPipeline,
    "team_pitching": TeamPitchingPipeline,
    "team_fielding": TeamFieldingPipeline,
    "curious_facts": CuriousFactsPipeline,
    "win_trends": WinTrendsPipeline,
    # Roster before anything keyed on players
    "player_roster": PlayerRosterPipeline,
    "player_season_stats": PlayerSeasonStatsPipeline,
    "player_fielding": PlayerFieldingPipeline,
    "matches": MatchesPipeline,
    "team_schedule": TeamSchedulePipeline,
}


def get_pipeline(name: str) -> BasePipeline:
    """
    Get a pipeline instance by name.

    Args:
        name: Pipeline name (e.g., "team_hitting")

    Returns:
        Instantiated pipeline

    Raises:
        KeyError: If pipeline name not found
    """
    if name not in PIPELINE_REGISTRY:
        available = ", ".join(PIPELINE_REGISTRY.keys())
        raise KeyError(f"Unknown pipeline '{name}'. Available: {available}")

    return PIPELINE_REGISTRY[name]()


async def run_pipeline(name: str) -> PipelineResult:
    """
    Run a pipeline by name.

    Args:
        name: Pipeline name

    Returns:
        PipelineResult with status and details
    """
    pipeline = get_pipeline(name)
    return await pipeline.run()


async def run_all_pipelines() -> dict[str, PipelineResult]:
    """
    Run all pipelines in sequence, in registration order.

    A failed pipeline does not stop the ones after it; each result is
    reported on its own.

    Returns:
        Dict mapping pipeline name to PipelineResult
    """
    log = get_logger("pipeline").bind(operation="run_all")

    results = {}
    pipeline_names = list(PIPELINE_REGISTRY.keys())

    log.info("all_pipelines_started", count=len(pipeline_names))

    for i, name in enumerate(pipeline_names, 1):
        log.info("running_pipeline", pipeline=name, step=f"{i}/{len(pipeline_names)}")
        results[name] = await run_pipeline(name)

    success_count = sum(1 for r in results.values() if r.status == ApiStatus.SUCCESS)
    log.info(
        "all_pipelines_completed",
        success_count=success_count,
        total_count=len(results),
    )

    return results


def list_pipelines() -> list[dict]:
    """
    List all available pipelines with their configurations.

    Returns:
        List of pipeline info dicts
    """
    return [cls.get_info() for cls in PIPELINE_REGISTRY.values()]


__all__ = [
    # Base classes
    "BasePipeline",
    "PipelineConfig",
    "PipelineContext",
    # Team pipelines
    "TeamHittingPipeline",
    "TeamPitchingPipeline",
    "TeamFieldingPipeline",
    "CuriousFactsPipeline",
    "WinTrendsPipeline",
    # Player pipelines
    "PlayerRosterPipeline",
    "PlayerSeasonStatsPipeline",
    "PlayerFieldingPipeline",
    # Match and schedule pipelines
    "MatchesPipeline",
    "TeamSchedulePipeline",
    # Registry functions
    "PIPELINE_REGISTRY",
    "get_pipeline",
    "run_pipeline",
    "run_all_pipelines",
    "list_pipelines",
]
