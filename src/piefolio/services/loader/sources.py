"""Reading JSON inputs from local files or HTTP(S) URLs."""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import aiohttp

from ...config.logging import get_logger
from ...exceptions import DataLoadError

logger = get_logger(__name__)


def is_remote(source: str) -> bool:
    """Check whether a source is an HTTP(S) URL rather than a file path."""
    return source.startswith(("http://", "https://"))


async def fetch_json(
    source: str, session: Optional[aiohttp.ClientSession] = None
) -> Any:
    """
    Fetch and decode a JSON document.

    Args:
        source: File path or http(s) URL
        session: Client session used for URLs

    Returns:
        Decoded JSON payload

    Raises:
        DataLoadError: If the document cannot be fetched or decoded
    """
    if is_remote(source):
        if session is None:
            raise DataLoadError(source, "No HTTP session available")
        return await _fetch_remote(source, session)

    try:
        text = await asyncio.to_thread(Path(source).read_text, encoding="utf-8")
        return json.loads(text)
    except FileNotFoundError as e:
        raise DataLoadError(source, f"File not found: {source}") from e
    except (OSError, ValueError) as e:
        raise DataLoadError(source, f"Could not read {source}: {e}") from e


async def _fetch_remote(source: str, session: aiohttp.ClientSession) -> Any:
    try:
        async with session.get(source) as response:
            if response.status != 200:
                raise DataLoadError(
                    source, f"HTTP {response.status}: {response.reason}"
                )
            return await response.json(content_type=None)
    except aiohttp.ClientError as e:
        raise DataLoadError(source, f"Request to {source} failed: {e}") from e
    except ValueError as e:
        raise DataLoadError(source, f"Invalid JSON from {source}: {e}") from e
