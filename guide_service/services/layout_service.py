"""
Layout Service

Composes the axis and grid services into a single layout for one document.
"""
from datetime import datetime, timezone, tzinfo
import logging

from guide_service.schemas import GuideDocument, GuideLayout
from guide_service.services.axis_service import build_axis
from guide_service.services.grid_service import annotate_document
from guide_service.utils.slots import SLOT_INTERVAL_MINUTES

logger = logging.getLogger(__name__)


def build_layout(
    document: GuideDocument,
    *,
    tz: tzinfo = timezone.utc,
    fetched_at: datetime | None = None
) -> GuideLayout:
    """
    Build the renderable layout of a guide document

    Args:
        document: Raw guide document
        tz: Timezone for axis labels
        fetched_at: When the document was retrieved, if known

    Returns:
        GuideLayout with axis labels and annotated rows
    """
    axis = build_axis(document.start_time, document.end_time, tz=tz)
    annotated = annotate_document(document)

    program_count = sum(len(row.programs) for row in annotated.rows)
    logger.debug(
        "Layout built: %s columns, %s rows, %s programs",
        len(axis),
        len(annotated.rows),
        program_count,
    )

    return GuideLayout(
        start_time=annotated.start_time,
        end_time=annotated.end_time,
        rows=annotated.rows,
        axis=axis,
        column_count=len(axis),
        slot_interval_minutes=SLOT_INTERVAL_MINUTES,
        fetched_at=fetched_at.isoformat() if fetched_at else None,
    )
