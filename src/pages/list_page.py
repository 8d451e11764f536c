"""State holder behind a paged, searchable, sortable resource table.

At most one load is live per page. Starting a load cancels the previous
token; a load whose token was cancelled by the time its result arrives
leaves state untouched, so a slow earlier response can never overwrite a
newer one.
"""
from __future__ import annotations

import threading

from app_logging import get_logger
from exceptions import DataFetchError, FetchCancelled
from fetching.cancellation import CancellationToken
from fetching.pagination import PaginationState
from resources.client import ResourceClient

SORT_MODES = ("newest", "oldest", "name-asc", "name-desc")


class ListPage:
    def __init__(self, client: ResourceClient, page_size: int = 10):
        self.client = client
        self.page_size = page_size
        self.records: list[dict[str, str]] = []
        self.pagination = PaginationState(page_size=page_size)
        self.error: str | None = None
        self.loading = False
        self.query = ""
        self.sort = "newest"
        self._active: CancellationToken | None = None
        self._lock = threading.Lock()
        self._log = get_logger(f"assetdesk.pages.{client.spec.name}")

    @property
    def current_page(self) -> int:
        return self.pagination.page

    def load(self, page: int | None = None) -> bool:
        """Fetch ``page`` (default: the current one). Returns True if state was updated."""
        page = max(1, page or self.pagination.page)
        token = CancellationToken()
        with self._lock:
            if self._active is not None:
                self._active.cancel("superseded")
            self._active = token
            if not self.records:
                self.loading = True
            self.error = None
        try:
            result = self.client.list_page(page, self.page_size, token)
        except FetchCancelled:
            self._log.debug("load_cancelled", extra={"page": page})
            return False
        except DataFetchError as e:
            with self._lock:
                if token.cancelled:
                    return False
                self._finish(token)
                if not self.records:
                    self.error = e.message
            self._log.error("load_failed", extra={"page": page, "error": str(e)})
            return False

        with self._lock:
            if token.cancelled:
                return False
            self._finish(token)
            if not result.succeeded and not result.records:
                if not self.records:
                    self.error = result.error
                return False
            self.records = result.records
            self.pagination = result.pagination
            self.error = None
        if result.pagination.page < page:
            # requested page no longer exists (e.g. after deletes); show page 1 instead
            return self.load(result.pagination.page)
        return True

    def _finish(self, token: CancellationToken) -> None:
        if self._active is token:
            self._active = None
        self.loading = False

    def refresh(self) -> bool:
        return self.load(self.pagination.page)

    def next_page(self) -> bool:
        if not self.pagination.has_next:
            return False
        return self.load(self.pagination.page + 1)

    def previous_page(self) -> bool:
        if not self.pagination.has_previous:
            return False
        return self.load(self.pagination.page - 1)

    def set_page_size(self, page_size: int) -> bool:
        if page_size < 1:
            raise ValueError("page size must be positive")
        self.page_size = page_size
        return self.load(1)

    def set_sort(self, mode: str) -> None:
        if mode not in SORT_MODES:
            raise ValueError(f"Unsupported sort: {mode}")
        self.sort = mode

    def set_query(self, query: str) -> None:
        self.query = query or ""

    def visible_rows(self) -> list[dict[str, str]]:
        display = self.client.spec.display_name
        needle = self.query.strip().lower()
        rows = [r for r in self.records if needle in display(r).lower()] if needle else list(self.records)
        if self.sort in ("newest", "oldest"):
            rows.sort(key=lambda r: r.get("createdAt") or display(r), reverse=self.sort == "newest")
        else:
            rows.sort(key=lambda r: display(r).casefold(), reverse=self.sort == "name-desc")
        return rows

    def summary(self) -> str:
        return self.pagination.summary()

    def delete(self, record_id: str) -> bool:
        """Delete one record and refetch the current page.

        Raises:
            MutationError: the backend refused the delete.
        """
        self.client.delete(record_id)
        self._log.info("deleted", extra={"id": record_id})
        return self.refresh()

    def close(self) -> None:
        with self._lock:
            if self._active is not None:
                self._active.cancel("closed")
                self._active = None


__all__ = ["ListPage", "SORT_MODES"]
