"""Test configuration for assetdesk.

Ensures the local `src` directory is importable so that `import fetching`
style imports succeed without an editable install, and provides a fake HTTP
transport that hands back real `requests.Response` objects.
"""
from __future__ import annotations

import json
import pathlib
import sys
import threading

import pytest

ROOT = pathlib.Path(__file__).resolve().parent
SRC = ROOT / "src"


def _ensure(p: pathlib.Path):
    sp = str(p)
    if p.is_dir() and sp not in sys.path:
        sys.path.insert(0, sp)


_ensure(SRC)

import requests  # noqa: E402
from requests.structures import CaseInsensitiveDict  # noqa: E402

from config import _Settings  # noqa: E402


def build_response(status=200, body=None, text=None, headers=None, url=""):
    r = requests.Response()
    r.status_code = status
    if body is not None:
        content = json.dumps(body).encode("utf-8")
    elif text is not None:
        content = text.encode("utf-8")
    else:
        content = b""
    r._content = content
    r.headers = CaseInsensitiveDict(headers or {})
    r.encoding = "utf-8"
    r.url = url
    return r


class FakeTransport:
    """Records calls and answers them with ``handler(method, url, **kwargs)``.

    The handler may return a response or an exception instance to raise.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, method, url, *, timeout=None, **kwargs):
        with self._lock:
            self.calls.append((method, url, kwargs))
        result = self.handler(method, url, **kwargs)
        if isinstance(result, BaseException):
            raise result
        return result

    @property
    def urls(self):
        return [url for _, url, _ in self.calls]


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def fake_transport():
    return FakeTransport


@pytest.fixture
def settings():
    return _Settings(timeout=5.0, max_attempts=3, backoff_base=0.0, page_size=10)


@pytest.fixture
def client_for(settings):
    """Build a ``ResourceClient`` over a ``FakeTransport``; returns ``(client, transport)``."""
    from resources.client import ResourceClient

    def build(name, handler):
        transport = FakeTransport(handler)
        return ResourceClient(name, settings=settings, transport=transport, sleep=lambda s: None), transport

    return build
