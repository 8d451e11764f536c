"""Timeout-bounded HTTP calls.

The transport is an injectable callable so tests can hand in a stub that
returns canned ``requests.Response`` objects, the same way the list adapters
accept an ``http`` callable.
"""
from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Protocol

import requests

from exceptions import DataFetchError, FetchCancelled, FetchTimeout

from .cancellation import CancellationToken

DEFAULT_TIMEOUT = 10.0
JSON_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}
_TIMEOUT_REASON = "timeout"
_MAX_WORKERS = 32


class Transport(Protocol):
    def __call__(self, method: str, url: str, *, timeout: float | None = None, **kwargs: Any) -> requests.Response:  # noqa: D401,E501
        ...


@dataclass
class RequestOptions:
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))
    params: dict[str, Any] | None = None
    json: Any = None
    data: Any = None
    files: Any = None

    def as_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": self.headers}
        for name in ("params", "json", "data", "files"):
            value = getattr(self, name)
            if value is not None:
                kwargs[name] = value
        return kwargs


class RequestsTransport:
    """Default transport backed by a shared ``requests.Session``."""

    def __init__(self, session: requests.Session | None = None):
        self._session = session or requests.Session()

    def __call__(self, method: str, url: str, *, timeout: float | None = None, **kwargs: Any) -> requests.Response:
        return self._session.request(method, url, timeout=timeout, **kwargs)

    def close(self) -> None:
        self._session.close()


_default_transport: RequestsTransport | None = None
_default_lock = threading.Lock()


def default_transport() -> RequestsTransport:
    global _default_transport
    with _default_lock:
        if _default_transport is None:
            _default_transport = RequestsTransport()
        return _default_transport


_executor: ThreadPoolExecutor | None = None


def _request_pool() -> ThreadPoolExecutor:
    global _executor
    with _default_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=_MAX_WORKERS, thread_name_prefix="assetdesk-fetch")
        return _executor


def fetch_with_timeout(
    url: str,
    options: RequestOptions | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    token: CancellationToken | None = None,
    transport: Transport | None = None,
) -> requests.Response:
    """Issue one request bounded by ``timeout`` and the caller's ``token``.

    The request runs on a worker thread; this call returns as soon as the
    response arrives, the timer fires or the token is cancelled. An
    abandoned request finishes in the background and its result is dropped.

    Raises:
        FetchCancelled: the caller's token fired before the response was used.
        FetchTimeout: the timer fired first, or the transport timed out.
        DataFetchError: any other transport failure.
    """
    options = options or RequestOptions()
    transport = transport or default_transport()
    if token is not None:
        token.raise_if_cancelled()

    internal = token.child() if token is not None else CancellationToken()
    timer = threading.Timer(timeout, internal.cancel, args=(_TIMEOUT_REASON,))
    timer.daemon = True
    timer.start()
    settled = threading.Event()
    try:
        future = _request_pool().submit(transport, options.method, url, timeout=timeout, **options.as_kwargs())
        future.add_done_callback(lambda _: settled.set())
        internal.on_cancel(settled.set)
        settled.wait()
        if internal.cancelled:
            future.cancel()
            if internal.reason == _TIMEOUT_REASON:
                raise FetchTimeout(url, f"timed out after {timeout}s")
            raise FetchCancelled(internal.reason)
        try:
            response = future.result()
        except requests.Timeout as e:
            raise FetchTimeout(url, f"timed out after {timeout}s") from e
        except requests.RequestException as e:
            raise DataFetchError(url, str(e)) from e
        return response
    finally:
        timer.cancel()
        internal.detach()


__all__ = [
    "DEFAULT_TIMEOUT",
    "JSON_HEADERS",
    "RequestOptions",
    "RequestsTransport",
    "Transport",
    "default_transport",
    "fetch_with_timeout",
]
