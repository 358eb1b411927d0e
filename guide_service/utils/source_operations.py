"""
Source operation utilities

This module reads raw guide payloads from HTTP endpoints (with retry logic)
or from local JSON files.
"""
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import httpx


logger = logging.getLogger(__name__)


def is_http_source(source: str) -> bool:
    """Check whether a source refers to an HTTP/HTTPS endpoint"""
    return source.lower().startswith(("http://", "https://"))


def sanitize_source_for_logging(source: str) -> str:
    """Remove credentials from URL for safe logging."""
    if "://" not in source:
        return source
    try:
        protocol, rest = source.split("://", 1)
        if "@" in rest:
            rest = rest.split("@", 1)[1]
            return f"{protocol}://***:***@{rest}"
        return source
    except (ValueError, IndexError):
        return source


async def fetch_json(
    url: str,
    timeout: float = 30.0,
    max_retries: int = 3,
    backoff_factor: float = 2.0,
    transport: httpx.AsyncBaseTransport | None = None
) -> Any:
    """
    Fetch a JSON payload from URL with exponential backoff retry logic

    Retries on transient network errors (timeouts, connection errors) and
    5xx responses. Does NOT retry on 4xx HTTP errors (client errors).

    Args:
        url: URL to fetch
        timeout: HTTP timeout in seconds
        max_retries: Maximum number of attempts
        backoff_factor: Exponential backoff multiplier (wait = backoff_factor ^ attempt)
        transport: Optional httpx transport (used to stub the upstream)

    Returns:
        Decoded JSON payload

    Raises:
        httpx.HTTPError: If the request fails after all retries
        ValueError: If the response body is not valid JSON
    """
    safe_url = sanitize_source_for_logging(url)
    logger.info(f"Fetching guide from {safe_url}...")

    last_error: Exception | None = None

    for attempt in range(max_retries):
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.get(url)
                response.raise_for_status()

                payload = response.json()
                logger.info(f"Fetched {len(response.content) / 1024:.1f} KB from {safe_url}")
                return payload

        except (httpx.TimeoutException, httpx.ConnectError) as e:
            # Transient network errors - retry
            last_error = e
            if attempt < max_retries - 1:
                wait_time = backoff_factor ** attempt
                logger.warning(
                    f"Fetch attempt {attempt + 1}/{max_retries} failed (transient error): {type(e).__name__}. "
                    f"Retrying in {wait_time:.1f}s..."
                )
                await asyncio.sleep(wait_time)
            else:
                logger.error(f"Fetch failed after {max_retries} attempts (transient error)")

        except httpx.HTTPStatusError as e:
            # HTTP errors - don't retry on 4xx (client error), retry on 5xx (server error)
            if 400 <= e.response.status_code < 500:
                logger.error(f"HTTP {e.response.status_code} (client error) from {safe_url}")
                raise

            last_error = e
            if attempt < max_retries - 1:
                wait_time = backoff_factor ** attempt
                logger.warning(
                    f"Fetch attempt {attempt + 1}/{max_retries} failed "
                    f"(HTTP {e.response.status_code} server error). "
                    f"Retrying in {wait_time:.1f}s..."
                )
                await asyncio.sleep(wait_time)
            else:
                logger.error(f"Fetch failed after {max_retries} attempts (HTTP {e.response.status_code})")

    if last_error:
        raise last_error

    raise RuntimeError(f"Failed to fetch {safe_url} after {max_retries} attempts")


async def read_json_file(file_path: Path | str) -> Any:
    """
    Read and decode a JSON file

    Args:
        file_path: Path to the JSON document

    Returns:
        Decoded JSON payload

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON
    """
    path = Path(file_path)
    logger.info(f"Reading guide from {path}...")

    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        content = await f.read()

    return json.loads(content)
