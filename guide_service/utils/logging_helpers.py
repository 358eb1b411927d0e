"""
Structured logging helpers for consistent log formatting.
"""
import logging
from datetime import datetime, timezone


def log_refresh_start(logger: logging.Logger, source: str) -> None:
    """
    Log guide refresh start.

    Args:
        logger: Logger instance
        source: Sanitized source being fetched
    """
    logger.info(f"Guide refresh started at {datetime.now(timezone.utc).isoformat()} from {source}")


def log_refresh_end(logger: logging.Logger, rows_count: int) -> None:
    """Log guide refresh end."""
    logger.info(
        f"Guide refresh completed at {datetime.now(timezone.utc).isoformat()} ({rows_count} rows)"
    )
