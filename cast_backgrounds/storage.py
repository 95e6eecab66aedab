"""Reading and writing background lists on disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence, Union

from .errors import FileIOError, ParseError
from .models import BackgroundEntry

logger = logging.getLogger("cast_backgrounds")

PathLike = Union[str, Path]


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FileIOError(f"Failed to write {path}: {exc}") from exc


def load_backgrounds(path: PathLike) -> List[BackgroundEntry]:
    """Load a JSON array of background objects saved by :func:`save_backgrounds`."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileIOError(f"Failed to read {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ParseError(f"{path} must contain a JSON array")
    entries = [BackgroundEntry.from_dict(item) for item in data]
    logger.debug("Loaded %d background(s) from %s", len(entries), path)
    return entries


def save_backgrounds(path: PathLike, entries: Sequence[BackgroundEntry]) -> Path:
    """Write entries as a 4-space indented JSON array, replacing the file."""
    path = Path(path)
    payload = [entry.to_dict() for entry in entries]
    _write_text(path, json.dumps(payload, indent=4, ensure_ascii=False))
    return path


def render_markdown(entries: Sequence[BackgroundEntry]) -> str:
    return "".join(f"![]({entry.url})\n" for entry in entries)


def write_markdown(path: PathLike, entries: Sequence[BackgroundEntry]) -> Path:
    """Write one inline image line per entry, replacing the file."""
    path = Path(path)
    _write_text(path, render_markdown(entries))
    return path
