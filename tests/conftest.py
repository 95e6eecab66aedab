"""Shared fixtures for the cast_backgrounds tests.

No test touches the network: page fetches go through a mounted
``requests`` adapter and image downloads through ``httpx.MockTransport``.
"""

import json

import pytest
import requests
from requests.adapters import BaseAdapter

from cast_backgrounds.models import BackgroundEntry

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def js_escape(text):
    """Escape text the way the home page embeds it in JSON.parse('...')."""
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace('"', "\\x22")
        .replace("/", "\\/")
    )


def make_home_html(items):
    payload = js_escape(json.dumps([items, None], ensure_ascii=False))
    return (
        "<html><head>"
        "<script src=\"/static/app.js\"></script>"
        f"<script>window.INITIAL_STATE = JSON.parse('{payload}');</script>"
        "</head><body><div id=\"picture-tray\"></div></body></html>"
    )


class StaticAdapter(BaseAdapter):
    """Answers every request with a fixed status and body."""

    def __init__(self, status=200, body="", error=None):
        super().__init__()
        self.status = status
        self.body = body
        self.error = error
        self.requests = []

    def send(self, request, **kwargs):
        self.requests.append((request, kwargs))
        if self.error is not None:
            raise self.error
        resp = requests.Response()
        resp.status_code = self.status
        resp._content = self.body.encode("utf-8")
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass


def session_with(adapter):
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


@pytest.fixture
def entries():
    return [
        BackgroundEntry(
            url="https://lh3.googleusercontent.com/abc/s1280-w1280-c-h720/lake.jpg",
            extra={"author": "Ansel"},
        ),
        BackgroundEntry(url="https://lh4.googleusercontent.com/def/s220/forest%20path.jpg"),
        BackgroundEntry(
            url="https://lh5.googleusercontent.com/ghi/s2048/caf%C3%A9.jpg",
            extra={"author": "José"},
        ),
    ]
