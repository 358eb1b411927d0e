"""
Guide Fetch Service

Retrieves the raw guide document from the configured source and validates it.
"""
import logging

import httpx
from pydantic import ValidationError

from guide_service.schemas import GuideDocument
from guide_service.utils.source_operations import (
    fetch_json,
    is_http_source,
    read_json_file,
    sanitize_source_for_logging,
)


logger = logging.getLogger(__name__)


class GuideSourceError(RuntimeError):
    """Raised when the guide document cannot be retrieved or is malformed"""

    def __init__(self, source: str, message: str):
        self.source = sanitize_source_for_logging(source)
        super().__init__(f"{message} ({self.source})")


async def fetch_guide_document(
    source: str,
    *,
    timeout: float = 30.0,
    max_retries: int = 3,
    backoff_factor: float = 2.0,
    transport: httpx.AsyncBaseTransport | None = None
) -> GuideDocument:
    """
    Fetch and validate a guide document

    Args:
        source: HTTP/HTTPS URL or filesystem path of the JSON document
        timeout: HTTP timeout in seconds
        max_retries: Maximum number of HTTP attempts
        backoff_factor: Exponential backoff multiplier between attempts
        transport: Optional httpx transport (used to stub the upstream)

    Returns:
        Validated GuideDocument

    Raises:
        GuideSourceError: If retrieval, decoding or validation fails
    """
    try:
        if is_http_source(source):
            payload = await fetch_json(
                source,
                timeout=timeout,
                max_retries=max_retries,
                backoff_factor=backoff_factor,
                transport=transport,
            )
        else:
            payload = await read_json_file(source)
    except httpx.HTTPStatusError as exc:
        raise GuideSourceError(
            source, f"Guide source returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise GuideSourceError(
            source, f"Guide source unreachable: {type(exc).__name__}"
        ) from exc
    except OSError as exc:
        raise GuideSourceError(source, f"Cannot read guide file: {exc}") from exc
    except ValueError as exc:
        raise GuideSourceError(source, "Guide source returned invalid JSON") from exc

    try:
        document = GuideDocument.model_validate(payload)
    except ValidationError as exc:
        logger.error("Guide document failed validation: %s", exc.errors())
        raise GuideSourceError(
            source, f"Guide document is malformed ({exc.error_count()} errors)"
        ) from exc

    logger.info(
        "Guide document loaded: %s rows, %s programs",
        len(document.rows),
        sum(len(row.programs) for row in document.rows),
    )
    return document
