"""
Refresh Coordination

Manages guide refresh operations with concurrency protection and records the
outcome on the caller's GuideState.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable

from guide_service.schemas import GuideDocument
from guide_service.services.guide_fetch_service import GuideSourceError
from guide_service.services.guide_state import GuideState
from guide_service.utils.logging_helpers import log_refresh_end, log_refresh_start
from guide_service.utils.source_operations import sanitize_source_for_logging


logger = logging.getLogger(__name__)

GuideFetcher = Callable[[str], Awaitable[GuideDocument]]


class RefreshCoordinator:
    """
    Coordinates guide refreshes to prevent concurrent executions.

    Uses an internal asyncio.Lock so only one fetch runs at a time; a refresh
    requested while another is running is skipped rather than queued.
    """

    def __init__(self):
        """Initialize the refresh coordinator with a lock."""
        self._refresh_lock = asyncio.Lock()

    async def refresh(
        self,
        state: GuideState,
        source: str | None,
        fetch: GuideFetcher
    ) -> dict:
        """
        Fetch a new guide document and store it on the state.

        Args:
            state: Guide state to update
            source: Configured guide source (URL or path)
            fetch: Async callable returning a GuideDocument for a source

        Returns:
            Result dictionary with status "success", "skipped" or "error"
        """
        if self._refresh_lock.locked():
            logger.warning("Guide refresh already in progress, skipping this request")
            return {
                "status": "skipped",
                "message": "Guide refresh already in progress"
            }

        async with self._refresh_lock:
            if not source:
                logger.warning("GUIDE_SOURCE not configured - refresh aborted")
                state.fail_refresh("GUIDE_SOURCE not configured")
                return {"status": "error", "error": "GUIDE_SOURCE not configured"}

            log_refresh_start(logger, sanitize_source_for_logging(source))
            state.begin_refresh()
            try:
                document = await fetch(source)
            except GuideSourceError as exc:
                logger.error("Guide refresh failed: %s", exc)
                state.fail_refresh(str(exc))
                return {"status": "error", "error": str(exc)}
            except Exception as exc:  # Catch-all to keep the previous document serving
                logger.error("Unexpected error during guide refresh: %s", exc, exc_info=True)
                state.fail_refresh(str(exc))
                return {"status": "error", "error": str(exc)}
            finally:
                # Cancellation skips the handlers above
                state.loading = False

            state.complete_refresh(document, source)
            log_refresh_end(logger, len(document.rows))

            return {
                "status": "success",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "rows": len(document.rows),
                "programs": sum(len(row.programs) for row in document.rows),
            }

    def is_refreshing(self) -> bool:
        """
        Check if a refresh is currently in progress.

        Returns:
            True if a refresh is running, False otherwise
        """
        return self._refresh_lock.locked()
