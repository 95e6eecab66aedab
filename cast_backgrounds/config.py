"""Configuration objects and constants for fetching backgrounds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_SOURCE_URL = "https://clients3.google.com/cast/chromecast/home"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@dataclass
class FetchConfig:
    """Settings that control how the Chromecast home page is requested."""

    source_url: str = DEFAULT_SOURCE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = None
