"""
Axis Service

Builds the header labels of the guide time axis.
"""
from datetime import timezone, tzinfo

from guide_service.utils.slots import SLOT_INTERVAL_MS
from guide_service.utils.timezone import format_clock_label


def build_axis(
    start: int | None,
    end: int | None,
    *,
    tz: tzinfo = timezone.utc
) -> list[str]:
    """
    Build axis labels for every slot boundary from start up to end

    The first label is for ``start`` itself; each following label is one slot
    interval later. Labelling stops once the current instant is no longer
    strictly before ``end``, so a partially covered final slot still gets a
    label and the axis never under-covers the range.

    Args:
        start: Axis start in epoch milliseconds, or None
        end: Axis end in epoch milliseconds, or None
        tz: Timezone used to render the wall-clock labels

    Returns:
        List of "HH:MM" labels; empty when a bound is missing or start >= end
    """
    if start is None or end is None:
        return []

    labels: list[str] = []
    current = start
    while current < end:
        labels.append(format_clock_label(current, tz))
        current += SLOT_INTERVAL_MS

    return labels
