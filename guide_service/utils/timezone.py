"""
Date and Time utilities

This module handles conversion of millisecond epoch instants and wall-clock
label formatting. Centralizes timezone resolution so configuration and layout
use the same rules.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimezoneError(ValueError):
    """Raised when a timezone name cannot be resolved"""
    pass


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve a timezone name to a tzinfo instance

    Args:
        name: IANA timezone name (e.g., 'Europe/London') or 'UTC'

    Returns:
        tzinfo for the requested zone

    Raises:
        TimezoneError: If the name is not a known timezone
    """
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimezoneError(
            f"Invalid timezone: {name}. Must be a valid IANA timezone (e.g., 'Europe/London') or 'UTC'"
        ) from e


def epoch_ms_to_datetime(value: int, tz: tzinfo = timezone.utc) -> datetime:
    """
    Convert a millisecond epoch timestamp to an aware datetime

    Args:
        value: Milliseconds since the Unix epoch (may be negative)
        tz: Target timezone for the result

    Returns:
        Timezone-aware datetime in the requested zone
    """
    return (_EPOCH + timedelta(milliseconds=value)).astimezone(tz)


def format_clock_label(value: int, tz: tzinfo = timezone.utc) -> str:
    """Format a millisecond epoch timestamp as a zero-padded 24-hour HH:MM label"""
    return epoch_ms_to_datetime(value, tz).strftime("%H:%M")
