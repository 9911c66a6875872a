"""Download synthesized audio to a temporary file and play it."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from urllib.parse import urlparse

import httpx

from grouchy.config.logging import get_logger
from grouchy.errors import TransportError
from grouchy.voice.player import AudioPlayer

logger = get_logger("voice.retrieval")

DEFAULT_SUFFIX = ".wav"


def audio_suffix(location: str) -> str:
    """File extension for the downloaded clip, taken from the URL path."""
    suffix = Path(urlparse(location).path).suffix
    return suffix if suffix else DEFAULT_SUFFIX


async def download(http: httpx.AsyncClient, location: str, fd: int) -> int:
    """Stream ``location`` into the open file descriptor ``fd``.

    Returns:
        Number of bytes written
    """
    written = 0
    try:
        async with http.stream("GET", location) as response:
            if response.is_error:
                raise TransportError(f"GET {location} returned {response.status_code}", response.status_code)
            with os.fdopen(fd, "wb", closefd=False) as out:
                async for chunk in response.aiter_bytes():
                    out.write(chunk)
                    written += len(chunk)
    except httpx.HTTPError as exc:
        raise TransportError(f"GET {location} failed: {exc}") from exc
    return written


async def fetch_and_play(location: str, http: httpx.AsyncClient, player: AudioPlayer) -> None:
    """Download the clip at ``location``, play it, and delete the file.

    The temporary file is unique to this call and is removed whether the
    download, the playback, or neither failed. Errors propagate after cleanup.
    """
    fd, name = tempfile.mkstemp(prefix="grouchy-", suffix=audio_suffix(location))
    path = Path(name)
    try:
        try:
            size = await download(http, location, fd)
        finally:
            os.close(fd)
        logger.info(f"Downloaded {size} bytes of audio to {path.name}")
        await player.play(path)
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed {path.name}")
