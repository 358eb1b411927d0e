"""
Time slot constants shared by the axis and grid layout services.

The slot interval is fixed here and never taken from runtime input, so every
division by it is well defined.
"""

SLOT_INTERVAL_MINUTES = 30
SLOT_INTERVAL_MS = SLOT_INTERVAL_MINUTES * 60 * 1000

__all__ = ["SLOT_INTERVAL_MINUTES", "SLOT_INTERVAL_MS"]
