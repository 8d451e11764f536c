"""Multi-pattern list fetching with per-URL retries.

Candidate URLs are tried strictly in the order given. Each candidate gets up
to ``max_attempts_per_url`` attempts with exponential backoff
(``backoff_base * 2**k``). The first candidate that answers 2xx with a
decodable body wins, even when its list is empty; later candidates are not
consulted. If every candidate fails the result is an empty, unsuccessful
``ListResult`` rather than an exception. Cancellation always propagates.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

import requests

from app_logging import get_logger
from exceptions import BadStatusError, DataFetchError, FetchCancelled
from metrics.fetch_metrics import record_attempt, record_fallback, record_list_failure

from .cancellation import CancellationToken
from .decoding import safe_parse_json
from .extraction import extract_list
from .transport import DEFAULT_TIMEOUT, RequestOptions, Transport, fetch_with_timeout

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_BASE = 0.2

_log = get_logger("assetdesk.fetching.retry")


@dataclass
class FetchAttempt:
    url: str
    timeout: float
    retry_index: int
    aborted: bool = False
    status: int | None = None
    error: str | None = None


@dataclass
class ListResult:
    items: list
    response: requests.Response | None = None
    url: str | None = None
    attempts: list[FetchAttempt] = field(default_factory=list)
    succeeded: bool = False


def _pause(delay: float, token: CancellationToken | None, sleep: Callable[[float], Any] | None) -> None:
    if sleep is not None:
        sleep(delay)
    elif token is not None:
        token.wait(delay)
    else:
        time.sleep(delay)
    if token is not None:
        token.raise_if_cancelled()


def fetch_json_list_with_retry(
    url: str,
    options: RequestOptions | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    token: CancellationToken | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    backoff_base: float = DEFAULT_BACKOFF_BASE,
    aliases: Sequence[str] = (),
    transport: Transport | None = None,
    sleep: Callable[[float], Any] | None = None,
    resource: str = "unknown",
    attempts: list[FetchAttempt] | None = None,
) -> tuple[list, requests.Response]:
    """Fetch one URL, retrying failures; return ``(items, response)``.

    Raises:
        FetchCancelled: as soon as the token fires.
        DataFetchError: after ``max_attempts`` failed attempts.
    """
    max_attempts = max(1, max_attempts)
    last_err: DataFetchError | None = None
    for k in range(max_attempts):
        attempt = FetchAttempt(url=url, timeout=timeout, retry_index=k)
        if attempts is not None:
            attempts.append(attempt)
        started = time.perf_counter()
        try:
            response = fetch_with_timeout(url, options, timeout, token, transport)
            attempt.status = response.status_code
            if not response.ok:
                raise BadStatusError(url, response.status_code)
            if not (response.content or b"").strip():
                items: list = []
            else:
                payload = safe_parse_json(response)
                if payload is None:
                    raise DataFetchError(url, "undecodable response body")
                items = extract_list(payload, aliases)
            record_attempt(resource, "ok", time.perf_counter() - started)
            return items, response
        except FetchCancelled:
            attempt.aborted = True
            record_attempt(resource, "cancelled")
            _log.debug("cancelled", extra={"url": url, "attempt": k + 1})
            raise
        except DataFetchError as e:
            attempt.error = str(e)
            last_err = e
            record_attempt(resource, "error")
        if k < max_attempts - 1:
            delay = backoff_base * (2 ** k)
            _log.warning(
                "retrying", extra={"url": url, "attempt": k + 1, "max": max_attempts, "sleep": round(delay, 4)}
            )
            _pause(delay, token, sleep)
    raise DataFetchError(url, f"failed after {max_attempts} attempts: {last_err}") from last_err


def fetch_list_with_fallback(
    candidate_urls: Sequence[str],
    options: RequestOptions | None = None,
    max_attempts_per_url: int = DEFAULT_MAX_ATTEMPTS,
    token: CancellationToken | None = None,
    **kwargs: Any,
) -> ListResult:
    resource = kwargs.get("resource", "unknown")
    result = ListResult(items=[])
    for index, url in enumerate(candidate_urls):
        if token is not None:
            token.raise_if_cancelled()
        if index:
            record_fallback(resource)
        try:
            items, response = fetch_json_list_with_retry(
                url, options, max_attempts_per_url, token, attempts=result.attempts, **kwargs
            )
        except DataFetchError as e:
            _log.warning("candidate_failed", extra={"url": url, "error": str(e)})
            continue
        result.items = items
        result.response = response
        result.url = url
        result.succeeded = True
        _log.info("fetched", extra={"url": url, "rows": len(items), "status": "ok"})
        return result
    record_list_failure(resource)
    _log.warning("all_candidates_failed", extra={"resource": resource, "candidates": len(candidate_urls)})
    return result


__all__ = [
    "DEFAULT_BACKOFF_BASE",
    "DEFAULT_MAX_ATTEMPTS",
    "FetchAttempt",
    "ListResult",
    "fetch_json_list_with_retry",
    "fetch_list_with_fallback",
]
