"""Resilient list fetching shared by every resource page."""
from __future__ import annotations

from .cancellation import CancellationToken
from .decoding import error_message, parse_json_text, safe_parse_json
from .extraction import extract_list, first_value
from .normalizer import FieldSpec, RecordNormalizer, default_aliases
from .pagination import PaginationState, header_int, reconcile
from .retry import FetchAttempt, ListResult, fetch_json_list_with_retry, fetch_list_with_fallback
from .transport import RequestOptions, RequestsTransport, Transport, fetch_with_timeout

__all__ = [
    "CancellationToken",
    "FetchAttempt",
    "FieldSpec",
    "ListResult",
    "PaginationState",
    "RecordNormalizer",
    "RequestOptions",
    "RequestsTransport",
    "Transport",
    "default_aliases",
    "error_message",
    "extract_list",
    "fetch_json_list_with_retry",
    "fetch_list_with_fallback",
    "fetch_with_timeout",
    "first_value",
    "header_int",
    "parse_json_text",
    "reconcile",
    "safe_parse_json",
]
