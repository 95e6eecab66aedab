"""Data models used throughout the backgrounds pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import ParseError
from .utils import name_from_url


@dataclass
class BackgroundEntry:
    """One background image scraped from the Chromecast home page.

    ``url`` is required. Any other scraped field (for example ``author``)
    is kept in ``extra`` so that it survives a save/load cycle unchanged.
    """

    url: str
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return name_from_url(self.url)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BackgroundEntry":
        if not isinstance(data, Mapping):
            raise ParseError(f"Background entry must be an object, got {type(data).__name__}")
        url = data.get("url")
        if not isinstance(url, str) or not url:
            raise ParseError(f"Background entry is missing a url: {dict(data)!r}")
        extra = {key: value for key, value in data.items() if key != "url"}
        return cls(url=url, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, **self.extra}


@dataclass
class DownloadResult:
    """Outcome of downloading a single background."""

    url: str
    path: Path
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DownloadReport:
    """Aggregated outcome of a download run."""

    results: List[DownloadResult]

    @property
    def saved(self) -> List[Path]:
        return [result.path for result in self.results if result.ok]

    @property
    def failures(self) -> List[DownloadResult]:
        return [result for result in self.results if not result.ok]
