"""In-memory transformations over background entry lists."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .models import BackgroundEntry
from .utils import SIZE_PATTERN


def update_size(size: str, entries: List[BackgroundEntry]) -> List[BackgroundEntry]:
    """Rewrite the size segment of every URL in place, e.g. ``/s220/`` -> ``/s1920/``."""
    replacement = f"/{size}/"
    for entry in entries:
        entry.url = SIZE_PATTERN.sub(lambda _match: replacement, entry.url, count=1)
    return entries


def merge_backgrounds(
    fresh: Sequence[BackgroundEntry],
    saved: Sequence[BackgroundEntry],
) -> Tuple[List[BackgroundEntry], int]:
    """Union two entry lists keyed by decoded filename.

    The first occurrence of each key wins and order is preserved, so fresh
    entries come first followed by saved entries the fetch no longer has.
    Returns the merged list and ``len(merged) - len(saved)``.
    """
    seen: Dict[str, BackgroundEntry] = {}
    for entry in (*fresh, *saved):
        seen.setdefault(entry.name, entry)
    merged = list(seen.values())
    return merged, len(merged) - len(saved)
