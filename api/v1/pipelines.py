"""
Pipeline API Routes

Endpoints for triggering data pipelines. Uses token-based authentication
so cron jobs and scheduled tasks can trigger pipelines.

Runs are synchronous from the caller's point of view: the request returns
once the pipeline (or every pipeline, for /all) has finished.
"""

from fastapi import APIRouter, HTTPException, Security

from core.logging import get_logger
from core.pipeline_auth import verify_pipeline_token
from db.models.pipeline_run import PipelineRun
from pipelines import PIPELINE_REGISTRY, list_pipelines, run_all_pipelines, run_pipeline
from schemas.common import ApiStatus
from schemas.pipeline import (
    AllPipelinesResponse,
    PipelineInfo,
    PipelineListResponse,
    PipelineResponse,
)

router = APIRouter(prefix="/pipelines", tags=["pipelines"])
log = get_logger("pipeline_api")


def _describe(info: dict) -> PipelineInfo:
    last_run = PipelineRun.get_latest_successful(info["name"])
    return PipelineInfo(
        **info,
        last_success_at=last_run.completed_at if last_run is not None else None,
    )


@router.get("/", response_model=PipelineListResponse)
async def get_available_pipelines(
    _: str = Security(verify_pipeline_token),
) -> PipelineListResponse:
    """
    List all available pipelines.

    Returns pipeline names, descriptions, sources, dependencies and the
    time of each pipeline's last successful run.
    """
    return PipelineListResponse(
        status=ApiStatus.SUCCESS,
        message=f"{len(PIPELINE_REGISTRY)} pipelines available",
        data=[_describe(info) for info in list_pipelines()],
    )


# Registered before /{name} so "all" is not taken for a pipeline name
@router.post("/all", response_model=AllPipelinesResponse)
async def trigger_all_pipelines(
    _: str = Security(verify_pipeline_token),
) -> AllPipelinesResponse:
    """
    Run every pipeline in registry order (blocks until complete).

    Order: team_hitting -> team_pitching -> team_fielding -> curious_facts
           -> win_trends -> player_roster -> player_season_stats
           -> player_fielding
    """
    results = await run_all_pipelines()

    # Determine overall status
    all_success = all(r.status == ApiStatus.SUCCESS for r in results.values())
    overall_status = ApiStatus.SUCCESS if all_success else ApiStatus.ERROR
    message = (
        "All pipelines completed successfully"
        if all_success
        else "Some pipelines failed"
    )

    return AllPipelinesResponse(
        status=overall_status,
        message=message,
        data=results,
    )


@router.post("/{name}", response_model=PipelineResponse)
async def trigger_pipeline(
    name: str,
    _: str = Security(verify_pipeline_token),
) -> PipelineResponse:
    """Run one pipeline by name (e.g. /pipelines/team_hitting)."""
    if name not in PIPELINE_REGISTRY:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown pipeline '{name}'. Available: {', '.join(PIPELINE_REGISTRY)}",
        )

    log.info("pipeline_triggered", pipeline=name)
    result = await run_pipeline(name)
    return PipelineResponse(
        status=result.status,
        message=result.message,
        data=result,
    )
