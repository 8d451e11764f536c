"""Best-effort adapter from assorted pagination envelopes to a plain list.

Backends wrap their rows differently (bare array, ``items``, ``data``,
``result``, or a resource-specific plural). The result is a guess; callers
must cope with an empty list.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

WRAPPER_KEYS = ("items", "data", "result")


def _looks_like_record(payload: dict) -> bool:
    for key in payload:
        if key in ("id", "ID") or key.endswith("Id") or key.endswith("ID"):
            return True
    return False


def extract_list(payload: Any, aliases: Sequence[str] = ()) -> list:
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []
    for key in (*WRAPPER_KEYS, *aliases):
        value = payload.get(key)
        if isinstance(value, list):
            return value
    if _looks_like_record(payload):
        return [payload]
    return []


def first_value(payload: Any, keys: Iterable[str]) -> Any | None:
    if not isinstance(payload, dict):
        return None
    for key in keys:
        value = payload.get(key)
        if value not in (None, ""):
            return value
    return None


__all__ = ["WRAPPER_KEYS", "extract_list", "first_value"]
