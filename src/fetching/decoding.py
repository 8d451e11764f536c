"""Tolerant JSON decoding for responses from backends that do not always send JSON."""
from __future__ import annotations

import json
from typing import Any, Iterator

_CLOSERS = {"{": "}", "[": "]"}
MAX_SCAN_CHARS = 1_000_000


def _match_close(text: str, start: int, stop: int) -> tuple[int | None, int]:
    """Return the index closing the bracket at ``start`` (or None) and the characters scanned."""
    stack: list[str] = []
    in_string = False
    escaped = False
    for i in range(start, stop):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in "}]":
            if not stack or stack.pop() != ch:
                return None, i - start + 1
            if not stack:
                return i, i - start + 1
    return None, stop - start


def balanced_fragments(text: str, max_scan: int = MAX_SCAN_CHARS) -> Iterator[str]:
    """Yield each balanced ``{...}`` / ``[...]`` substring, leftmost first.

    At most ``max_scan`` characters are examined across all openers, so a
    large body full of unclosed brackets stays cheap.
    """
    budget = max_scan
    for start, ch in enumerate(text):
        if ch not in _CLOSERS:
            continue
        if budget <= 0:
            return
        end, scanned = _match_close(text, start, min(len(text), start + budget))
        budget -= scanned
        if end is not None:
            yield text[start : end + 1]


def parse_json_text(text: str | None) -> Any | None:
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        pass
    for fragment in balanced_fragments(text):
        try:
            return json.loads(fragment)
        except ValueError:
            continue
    return None


def safe_parse_json(response: Any) -> Any | None:
    """Decode a response body; return ``None`` instead of raising."""
    try:
        return response.json()
    except Exception:  # requests raises its own JSONDecodeError subclasses
        pass
    try:
        text = response.text
    except Exception:
        return None
    return parse_json_text(text)


def error_message(payload: Any, default: str) -> str:
    if isinstance(payload, dict):
        for key in ("message", "error", "title", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return default


__all__ = ["balanced_fragments", "error_message", "parse_json_text", "safe_parse_json"]
