"""Pagination state reconciliation.

Servers report pagination through headers when they report it at all. The
reconciler merges those hints with the number of rows actually returned and
always yields a state with positive page numbers.
"""
from __future__ import annotations

import math
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field

TOTAL_COUNT_HEADERS = ("X-Total-Count", "X-Pagination-Total-Count")
TOTAL_PAGES_HEADERS = ("X-Total-Pages", "X-Pagination-Total-Pages")
PAGE_SIZE_HEADERS = ("X-Page-Size", "X-Pagination-Page-Size")
CURRENT_PAGE_HEADERS = ("X-Current-Page", "X-Pagination-Current-Page")


class PaginationState(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    total_pages: int = Field(default=1, ge=1)
    total_count: int = Field(default=0, ge=0)

    @property
    def first_item(self) -> int:
        if self.total_count == 0:
            return 0
        return min((self.page - 1) * self.page_size + 1, self.total_count)

    @property
    def last_item(self) -> int:
        return min(self.page * self.page_size, self.total_count)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def label(self) -> str:
        return f"Page {self.page} of {self.total_pages}"

    def summary(self, noun: str = "items") -> str:
        return f"Showing {self.first_item} to {self.last_item} of {self.total_count} {noun}."


def header_int(headers: Mapping[str, Any] | None, *names: str) -> int:
    """Return the first positive integer header among ``names`` (case-insensitive), else 0."""
    if not headers:
        return 0
    lowered = {str(k).lower(): v for k, v in headers.items()}
    for name in names:
        raw = lowered.get(name.lower())
        if raw is None:
            continue
        try:
            value = int(str(raw).strip())
        except ValueError:
            continue
        if value > 0:
            return value
    return 0


def reconcile(
    headers: Mapping[str, Any] | None,
    observed: int,
    requested_page: int,
    requested_page_size: int,
    out_of_range: Literal["reset", "clamp"] = "reset",
) -> PaginationState:
    page_size = header_int(headers, *PAGE_SIZE_HEADERS) or max(1, requested_page_size)
    requested_page = header_int(headers, *CURRENT_PAGE_HEADERS) or max(1, requested_page)
    observed = max(0, observed)

    total_count = header_int(headers, *TOTAL_COUNT_HEADERS)
    total_pages_hint = header_int(headers, *TOTAL_PAGES_HEADERS)
    if total_count > 0:
        total_pages = math.ceil(total_count / page_size)
    elif total_pages_hint > 0:
        total_pages = total_pages_hint
        if requested_page == total_pages:
            # rows on the last page are the only exact count available
            total_count = (total_pages - 1) * page_size + observed
        else:
            total_count = total_pages * page_size
    else:
        total_pages = max(1, math.ceil(observed / page_size))
        if observed > 0:
            total_pages = max(total_pages, requested_page)
            total_count = (requested_page - 1) * page_size + observed
        if observed >= page_size:
            total_pages = max(total_pages, requested_page + 1)
    total_pages = max(1, total_pages)

    page = requested_page
    if page > total_pages:
        page = total_pages if out_of_range == "clamp" else 1
    return PaginationState(page=page, page_size=page_size, total_pages=total_pages, total_count=total_count)


__all__ = [
    "CURRENT_PAGE_HEADERS",
    "PAGE_SIZE_HEADERS",
    "PaginationState",
    "TOTAL_COUNT_HEADERS",
    "TOTAL_PAGES_HEADERS",
    "header_int",
    "reconcile",
]
