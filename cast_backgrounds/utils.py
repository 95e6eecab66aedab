"""Utility helpers for URL handling."""

from __future__ import annotations

import re
from urllib.parse import unquote

SIZE_PATTERN = re.compile(r"/s\d+.*?/")


def name_from_url(url: str) -> str:
    """Return the percent-decoded last path segment of a URL."""
    return unquote(url.split("/")[-1])
