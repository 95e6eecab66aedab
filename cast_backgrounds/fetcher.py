"""Fetching and parsing of the Chromecast home page."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

import requests
from bs4 import BeautifulSoup

from .config import FetchConfig
from .errors import FetchError, ParseError
from .models import BackgroundEntry

logger = logging.getLogger("cast_backgrounds")

_JSON_PARSE_PATTERN = re.compile(r"JSON\.parse\('((?:[^'\\]|\\.)*)'\)", re.DOTALL)
_JS_ESCAPE_PATTERN = re.compile(r"\\(x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _decode_js_string(value: str) -> str:
    """Undo JavaScript single-quoted string escaping."""

    def _replace(match: re.Match) -> str:
        token = match.group(1)
        if len(token) > 1 and token[0] in "xu":
            return chr(int(token[1:], 16))
        return _SIMPLE_ESCAPES.get(token, token)

    decoded = _JS_ESCAPE_PATTERN.sub(_replace, value)
    # Escaped surrogate pairs decode to two lone surrogates; join them.
    try:
        return decoded.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Embedded payload has an unpaired surrogate: {exc}") from exc


def _find_payload(soup: BeautifulSoup) -> str:
    for script in soup.find_all("script"):
        match = _JSON_PARSE_PATTERN.search(script.string or "")
        if match:
            return _decode_js_string(match.group(1))
    raise ParseError("No inline JSON.parse payload found in page scripts")


def _entry_from_item(item: Any) -> Optional[BackgroundEntry]:
    if isinstance(item, dict):
        return BackgroundEntry.from_dict(item)
    if isinstance(item, list) and item and isinstance(item[0], str) and item[0]:
        extra = {}
        if len(item) > 1 and item[1] is not None:
            extra["author"] = item[1]
        return BackgroundEntry(url=item[0], extra=extra)
    return None


def parse_backgrounds(html: str) -> List[BackgroundEntry]:
    """Extract background entries, in document order, from the home page HTML."""
    soup = BeautifulSoup(html, "html.parser")
    payload = _find_payload(soup)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Embedded payload is not valid JSON: {exc}") from exc

    if not isinstance(data, list) or not data or not isinstance(data[0], list):
        raise ParseError("Embedded payload does not contain a background list")

    entries: List[BackgroundEntry] = []
    for index, item in enumerate(data[0]):
        try:
            entry = _entry_from_item(item)
        except ParseError as exc:
            logger.debug("Skipping item %d: %s", index, exc)
            continue
        if entry is None:
            logger.debug("Skipping item %d: no usable url", index)
            continue
        entries.append(entry)
    return entries


def fetch_page(config: FetchConfig, session: Optional[requests.Session] = None) -> str:
    """Download the home page HTML."""
    session = session or requests.Session()
    logger.debug("Requesting %s", config.source_url)
    try:
        resp = session.get(
            config.source_url,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {config.source_url}: {exc}") from exc
    return resp.text


def fetch_backgrounds(
    config: FetchConfig,
    session: Optional[requests.Session] = None,
) -> List[BackgroundEntry]:
    """Fetch the home page and return its backgrounds.

    Missing or changed markup yields an empty list rather than an error;
    network failures propagate as :class:`FetchError`.
    """
    html = fetch_page(config, session)
    try:
        entries = parse_backgrounds(html)
    except ParseError as exc:
        logger.warning("Could not parse backgrounds from %s: %s", config.source_url, exc)
        return []
    logger.debug("Parsed %d background(s)", len(entries))
    return entries
