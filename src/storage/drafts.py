from __future__ import annotations

import json
from typing import Any

from fetching.decoding import parse_json_text

from .kv import KeyValueStore


def draft_key(resource: str) -> str:
    return f"add-{resource}-draft-v1"


class DraftStore:
    """Form values kept across navigation; cleared on submit or reset."""

    def __init__(self, store: KeyValueStore, key: str):
        self._store = store
        self.key = key

    def load(self) -> dict[str, Any]:
        data = parse_json_text(self._store.get(self.key))
        return data if isinstance(data, dict) else {}

    def save(self, fields: dict[str, Any]) -> None:
        self._store.set(self.key, json.dumps(fields))

    def clear(self) -> None:
        self._store.remove(self.key)


__all__ = ["DraftStore", "draft_key"]
