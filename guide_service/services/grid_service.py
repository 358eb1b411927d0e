"""
Grid Service

Maps program time intervals onto the fixed-slot columns of the guide axis.
Pure transform: inputs are never modified, new row and program objects are
returned instead.
"""
import math

from guide_service.schemas import GuideDocument, Program
from guide_service.utils.slots import SLOT_INTERVAL_MS


def grid_column_start(start_time: int | float, axis_start: int) -> int | None:
    """
    Zero-based index of the slot a program starts in

    Not clamped: programs starting before the axis origin get a negative
    index, programs starting past the last slot get an index beyond it.
    A non-finite start has no column and yields None.
    """
    offset = start_time - axis_start
    if isinstance(offset, int):
        return offset // SLOT_INTERVAL_MS
    if not math.isfinite(offset):
        return None
    return math.floor(offset / SLOT_INTERVAL_MS)


def normalized_duration(start_time: int | float, end_time: int | float) -> int:
    """
    Program length in whole slots, rounded half up and never less than 1

    Integer instants use integer arithmetic so that an exact half slot always
    rounds up (1.5 slots -> 2, 2.5 slots -> 3). A non-finite length gets the
    minimum width.
    """
    elapsed = end_time - start_time
    if isinstance(elapsed, int):
        slots = (2 * elapsed + SLOT_INTERVAL_MS) // (2 * SLOT_INTERVAL_MS)
    elif math.isfinite(elapsed):
        slots = math.floor(elapsed / SLOT_INTERVAL_MS + 0.5)
    else:
        slots = 1
    return max(1, slots)


def map_program(program: Program, axis_start: int) -> Program:
    """Return a copy of the program with its grid coordinates filled in"""
    return program.model_copy(
        update={
            "grid_column_start": grid_column_start(program.start_time, axis_start),
            "normalized_duration": normalized_duration(program.start_time, program.end_time),
        }
    )


def annotate_document(document: GuideDocument) -> GuideDocument:
    """
    Annotate every program of every channel row with grid coordinates

    Program order inside a row is kept as given; overlapping or gapped
    programs are not adjusted. Existing grid fields are recomputed, so
    annotating an annotated document gives the same values.

    Args:
        document: Guide document whose start_time is the axis origin

    Returns:
        New GuideDocument with annotated copies of rows and programs
    """
    rows = [
        row.model_copy(
            update={
                "programs": [
                    map_program(program, document.start_time)
                    for program in row.programs
                ]
            }
        )
        for row in document.rows
    ]
    return document.model_copy(update={"rows": rows})
