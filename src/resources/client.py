"""REST client for one backend resource.

Reads go through the fallback list fetcher; writes are single-shot requests
whose failures surface as ``MutationError`` for the caller to show.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import quote

import requests

from app_logging import get_logger
from config import _Settings, get_settings
from exceptions import BadStatusError, DataFetchError, MutationError
from fetching.cancellation import CancellationToken
from fetching.decoding import error_message, safe_parse_json
from fetching.extraction import extract_list
from fetching.pagination import TOTAL_COUNT_HEADERS, PaginationState, header_int, reconcile
from fetching.retry import fetch_json_list_with_retry, fetch_list_with_fallback
from fetching.transport import RequestOptions, Transport, fetch_with_timeout
from metrics.fetch_metrics import record_mutation

from .registry import ResourceSpec, candidate_urls, get_resource, search_candidate_urls


@dataclass
class ResourcePage:
    records: list[dict[str, str]]
    pagination: PaginationState
    source_url: str | None = None
    succeeded: bool = True
    error: str | None = None
    raw_count: int = 0


class ResourceClient:
    def __init__(
        self,
        spec: ResourceSpec | str,
        settings: _Settings | None = None,
        transport: Transport | None = None,
        sleep: Callable[[float], Any] | None = None,
    ):
        self.spec = spec if isinstance(spec, ResourceSpec) else get_resource(spec)
        self._settings = settings or get_settings()
        self._transport = transport
        self._sleep = sleep
        self._log = get_logger(f"assetdesk.resources.{self.spec.name}")

    @property
    def base(self) -> str:
        return self._settings.origin(self.spec.origin)

    @property
    def endpoint(self) -> str:
        return f"{self.base}/{self.spec.path}"

    def _fetch_kwargs(self) -> dict[str, Any]:
        return {
            "timeout": self._settings.timeout,
            "backoff_base": self._settings.backoff_base,
            "aliases": self.spec.list_aliases,
            "transport": self._transport,
            "sleep": self._sleep,
            "resource": self.spec.name,
        }

    # ----------------- Reads -----------------
    def list_page(self, page: int = 1, page_size: int | None = None, token: CancellationToken | None = None) -> ResourcePage:
        page_size = page_size or self._settings.page_size
        urls = candidate_urls(self.spec, self.base, page, page_size)
        result = fetch_list_with_fallback(urls, None, self._settings.max_attempts, token, **self._fetch_kwargs())
        records = self.spec.normalizer.normalize_many(result.items)
        headers = result.response.headers if result.response is not None else None
        pagination = reconcile(headers, len(records), page, page_size)
        error = None
        if not result.succeeded:
            error = f"No {self.spec.plural} found. Please check your connection and try again."
        return ResourcePage(
            records=records,
            pagination=pagination,
            source_url=result.url,
            succeeded=result.succeeded,
            error=error,
            raw_count=len(result.items),
        )

    def get(self, record_id: str, token: CancellationToken | None = None) -> dict[str, str] | None:
        url = f"{self.endpoint}/{quote(str(record_id), safe='')}"
        response = fetch_with_timeout(url, RequestOptions(), self._settings.timeout, token, self._transport)
        if response.status_code == 404:
            return None
        if not response.ok:
            raise BadStatusError(self.spec.name, response.status_code)
        items = self.spec.normalizer.normalize_many(extract_list(safe_parse_json(response), self.spec.list_aliases))
        return items[0] if items else None

    def count(self, token: CancellationToken | None = None) -> int:
        urls = [self.endpoint] + [f"{self.base}/{alt}" for alt in self.spec.alt_paths]
        result = fetch_list_with_fallback(urls, None, self._settings.max_attempts, token, **self._fetch_kwargs())
        if not result.succeeded:
            return 0
        total = header_int(result.response.headers, *TOTAL_COUNT_HEADERS)
        return total or len(result.items)

    def find_duplicate(
        self,
        value: str,
        field_name: str = "name",
        exclude_id: str | None = None,
        token: CancellationToken | None = None,
    ) -> dict[str, str] | None:
        """Best-effort lookup of an existing record whose ``field_name`` equals ``value``.

        Misses are possible when the backend ignores the search parameters and
        pages its results.
        """
        term = value.strip()
        if not term:
            return None
        items: list = []
        for url in search_candidate_urls(self.spec, self.base, term):
            try:
                items, _ = fetch_json_list_with_retry(url, None, 1, token, **self._fetch_kwargs())
            except DataFetchError:
                continue
            if items:
                break
        wanted = term.lower()
        for record in self.spec.normalizer.normalize_many(items):
            if record.get(field_name, "").strip().lower() == wanted and record["id"] != exclude_id:
                return record
        return None

    # ----------------- Writes -----------------
    def _send(self, action: str, method: str, url: str, payload: Any = None, token: CancellationToken | None = None) -> requests.Response:
        options = RequestOptions(method=method, json=payload)
        self._log.debug("request", extra={"action": action, "url": url})
        try:
            return fetch_with_timeout(url, options, self._settings.timeout, token, self._transport)
        except DataFetchError as e:
            raise MutationError(self.spec.name, e.message) from e

    def _payload_variants(self, fields: dict[str, Any]) -> list[dict[str, Any]]:
        if self.spec.name_only and set(fields) == {"name"}:
            return self.spec.name_payloads(str(fields["name"]).strip())
        return [dict(fields)]

    def create(self, fields: dict[str, Any], token: CancellationToken | None = None) -> dict[str, str] | None:
        last_error: str | None = None
        for payload in self._payload_variants(fields):
            try:
                response = self._send("create", "POST", self.endpoint, payload, token)
            except MutationError as e:
                last_error = e.message
                continue
            body = safe_parse_json(response)
            if response.ok:
                record_mutation(self.spec.name, "create", "ok")
                self._log.info("created", extra={"resource": self.spec.name})
                return self.spec.normalizer.normalize(body)
            last_error = error_message(body, f"HTTP {response.status_code}")
        record_mutation(self.spec.name, "create", "error")
        raise MutationError(self.spec.name, last_error or f"Failed to create {self.spec.entity}")

    def update(self, record_id: str, fields: dict[str, Any], token: CancellationToken | None = None) -> None:
        url = f"{self.endpoint}/{quote(str(record_id), safe='')}"
        response = self._send("update", "PUT", url, {**fields, "id": record_id}, token)
        if not response.ok:
            record_mutation(self.spec.name, "update", "error")
            raise MutationError(self.spec.name, error_message(safe_parse_json(response), f"HTTP {response.status_code}"))
        record_mutation(self.spec.name, "update", "ok")
        self._log.info("updated", extra={"resource": self.spec.name, "id": record_id})

    def delete(self, record_id: str, token: CancellationToken | None = None) -> None:
        quoted = quote(str(record_id), safe="")
        for url in (f"{self.endpoint}/{quoted}", f"{self.endpoint}?id={quoted}"):
            try:
                response = self._send("delete", "DELETE", url, None, token)
            except MutationError:
                continue
            if response.ok:
                record_mutation(self.spec.name, "delete", "ok")
                self._log.info("deleted", extra={"resource": self.spec.name, "id": record_id})
                return
        record_mutation(self.spec.name, "delete", "error")
        raise MutationError(self.spec.name, f"Failed to delete {self.spec.entity}")


__all__ = ["ResourceClient", "ResourcePage"]
