from .auth import AuthSession, requires_auth
from .drafts import DraftStore, draft_key
from .kv import JsonFileStore, KeyValueStore, MemoryStore, open_store

__all__ = [
    "AuthSession",
    "DraftStore",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "draft_key",
    "open_store",
    "requires_auth",
]
