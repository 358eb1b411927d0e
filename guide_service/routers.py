from datetime import datetime, timezone
from typing import Annotated
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from guide_service.config import settings
from guide_service.dependencies import (
    get_guide_scheduler,
    get_guide_state,
    get_refresh_coordinator,
    refresh_guide,
)
from guide_service.schemas import (
    ErrorDetail,
    GuideDocument,
    GuideLayout,
    StandardErrorResponse,
)
from guide_service.services import GuideScheduler, GuideState, RefreshCoordinator, build_layout


logger = logging.getLogger(__name__)

main_router = APIRouter()


@main_router.get("/")
async def root(
    scheduler: Annotated[GuideScheduler, Depends(get_guide_scheduler)]
) -> dict:
    """Root endpoint with service information"""
    next_run = scheduler.get_next_run_time()

    return {
        "service": "Guide Service",
        "version": "0.1.0",
        "next_scheduled_refresh": next_run.isoformat() if next_run else None,
        "endpoints": {
            "guide": "/guide - Get the current guide laid out on the time grid",
            "layout": "/guide/layout - Lay out a posted guide document (POST)",
            "refresh": "/refresh - Manually trigger a guide refresh (POST)",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check(
    state: Annotated[GuideState, Depends(get_guide_state)],
    scheduler: Annotated[GuideScheduler, Depends(get_guide_scheduler)],
    coordinator: Annotated[RefreshCoordinator, Depends(get_refresh_coordinator)]
) -> dict:
    """Health check endpoint"""
    next_run = scheduler.get_next_run_time()
    return {
        "status": "ok",
        "scheduler_running": scheduler.running,
        "next_refresh": next_run.isoformat() if next_run else None,
        "refreshing": coordinator.is_refreshing(),
        "guide": state.snapshot()
    }


@main_router.get(
    "/guide",
    response_model=GuideLayout,
    responses={503: {"model": StandardErrorResponse}}
)
async def get_guide(
    state: Annotated[GuideState, Depends(get_guide_state)]
):
    """
    Get the current guide laid out on the time grid

    Returns:
        Axis labels plus every program annotated with its grid column start
        and normalized duration
    """
    document = state.document
    if document is None:
        logger.warning("Guide requested but no document is loaded")
        body = StandardErrorResponse(
            timestamp=datetime.now(timezone.utc).isoformat(),
            error=ErrorDetail(
                code="GUIDE_UNAVAILABLE",
                message="Unable to load guide",
                context={"error": state.error} if state.error else None,
            ),
        )
        return JSONResponse(status_code=503, content=body.model_dump())

    return build_layout(document, tz=settings.label_tzinfo, fetched_at=state.fetched_at)


@main_router.post("/guide/layout", response_model=GuideLayout)
async def layout_guide(document: GuideDocument) -> GuideLayout:
    """
    Lay out a guide document supplied by the caller

    Args:
        document: Raw guide document with millisecond epoch instants

    Returns:
        The same document with axis labels and grid coordinates added
    """
    return build_layout(document, tz=settings.label_tzinfo)


@main_router.post("/refresh")
async def trigger_refresh(request: Request) -> dict:
    """
    Manually trigger a guide refresh from the configured source
    """
    logger.info("Manual guide refresh triggered via API")
    result = await refresh_guide(request.app)

    if result.get("status") == "error":
        raise HTTPException(status_code=502, detail=result["error"])

    return result
