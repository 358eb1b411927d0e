"""
Dependency wiring

Per-application services (guide state, refresh coordinator, fetcher and
scheduler) live on ``app.state``; the helpers here expose them to route
handlers via FastAPI's Depends and run refreshes against them.
"""
from functools import partial
import logging

from fastapi import FastAPI, Request

from guide_service.config import settings
from guide_service.services.guide_fetch_service import fetch_guide_document
from guide_service.services.guide_state import GuideState
from guide_service.services.refresh_coordinator import GuideFetcher, RefreshCoordinator
from guide_service.services.scheduler_service import GuideScheduler


logger = logging.getLogger(__name__)


def build_guide_fetcher() -> GuideFetcher:
    """Create the fetch callable configured from settings."""
    return partial(
        fetch_guide_document,
        timeout=settings.guide_fetch_timeout_sec,
        max_retries=settings.guide_fetch_max_retries,
        backoff_factor=settings.guide_fetch_backoff_factor,
    )


def init_app_services(app: FastAPI) -> None:
    """Attach fresh per-application services to app.state."""
    app.state.guide_state = GuideState()
    app.state.refresh_coordinator = RefreshCoordinator()
    app.state.guide_fetcher = build_guide_fetcher()
    app.state.guide_scheduler = GuideScheduler(partial(refresh_guide, app))
    logger.debug("Application services initialized")


async def refresh_guide(app: FastAPI) -> dict:
    """Run a guide refresh against the application's state."""
    return await app.state.refresh_coordinator.refresh(
        app.state.guide_state,
        settings.guide_source,
        app.state.guide_fetcher,
    )


def get_guide_state(request: Request) -> GuideState:
    """Guide state dependency for FastAPI"""
    return request.app.state.guide_state


def get_guide_scheduler(request: Request) -> GuideScheduler:
    """Scheduler dependency for FastAPI"""
    return request.app.state.guide_scheduler


def get_refresh_coordinator(request: Request) -> RefreshCoordinator:
    """Refresh coordinator dependency for FastAPI"""
    return request.app.state.refresh_coordinator
