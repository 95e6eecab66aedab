"""Concurrent downloading of background images."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import httpx
from filetype import guess

from .errors import FetchError, FileIOError
from .models import BackgroundEntry, DownloadReport, DownloadResult

logger = logging.getLogger("cast_backgrounds")


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def prepare_directory(directory: Union[str, Path]) -> Path:
    """Create the target directory if needed; parents must already exist."""
    directory = Path(directory)
    try:
        directory.mkdir(exist_ok=True)
    except OSError as exc:
        raise FileIOError(f"Failed to create directory {directory}: {exc}") from exc
    return directory


async def download_background(
    client: httpx.AsyncClient,
    entry: BackgroundEntry,
    directory: Path,
) -> Path:
    """Stream a single background to ``directory`` under its decoded filename."""
    destination = directory / entry.name
    if destination.resolve().parent != directory.resolve():
        raise FileIOError(f"Refusing to write {entry.name!r} outside {directory}")
    try:
        async with client.stream("GET", entry.url) as resp:
            resp.raise_for_status()
            checked = False
            try:
                with destination.open("wb") as handle:
                    async for chunk in resp.aiter_bytes():
                        if not checked and chunk:
                            checked = True
                            if detect_image_format(chunk) is None:
                                logger.warning(
                                    "%s does not look like an image (Content-Type=%s)",
                                    entry.url,
                                    resp.headers.get("Content-Type", ""),
                                )
                        handle.write(chunk)
            except OSError as exc:
                raise FileIOError(f"Failed to write {destination}: {exc}") from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to download {entry.url}: {exc}") from exc
    logger.debug("%s", destination)
    return destination


async def download_backgrounds(
    entries: Sequence[BackgroundEntry],
    directory: Union[str, Path],
    client: Optional[httpx.AsyncClient] = None,
) -> DownloadReport:
    """Download every entry concurrently and wait for all of them to finish.

    All downloads start at once. A failure on one entry does not cancel the
    others; it is recorded in the returned report instead.
    """
    target = prepare_directory(directory)
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(follow_redirects=True, timeout=None)

    try:
        tasks = [download_background(client, entry, target) for entry in entries]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
    finally:
        if owns_client:
            await client.aclose()

    results = []
    for entry, outcome in zip(entries, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logger.warning("Download failed for %s: %s", entry.url, outcome)
            results.append(DownloadResult(url=entry.url, path=target / entry.name, error=outcome))
        else:
            results.append(DownloadResult(url=entry.url, path=outcome))
    return DownloadReport(results=results)
