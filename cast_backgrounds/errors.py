"""Exceptions raised by the backgrounds pipeline."""

from __future__ import annotations


class BackgroundsError(Exception):
    """Base class for all pipeline errors."""


class FetchError(BackgroundsError):
    """A network request failed or returned a non-2xx status."""


class ParseError(BackgroundsError):
    """Expected markup or JSON structure was missing or malformed."""


class FileIOError(BackgroundsError):
    """Reading or writing a local file failed."""
