"""Placeholder session: a stored token string is the whole of authentication.

There is no credential exchange. ``login`` records a token and the user's
display details; every route except the login page only checks that a token
is present.
"""
from __future__ import annotations

import json
import re
import secrets

from fetching.decoding import parse_json_text

from .kv import KeyValueStore

TOKEN_KEY = "authToken"
USER_KEY = "user"
PUBLIC_PATHS = frozenset({"/login"})

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value.strip()))


def requires_auth(path: str) -> bool:
    return path.rstrip("/") not in PUBLIC_PATHS


class AuthSession:
    def __init__(self, store: KeyValueStore):
        self._store = store

    def login(self, email: str, name: str | None = None) -> str:
        email = email.strip()
        if not is_valid_email(email):
            raise ValueError("Please enter a valid email address.")
        token = secrets.token_urlsafe(24)
        self._store.set(TOKEN_KEY, token)
        self._store.set(USER_KEY, json.dumps({"email": email, "name": (name or "").strip() or "User"}))
        return token

    def logout(self) -> None:
        self._store.remove(TOKEN_KEY)
        self._store.remove(USER_KEY)

    def token(self) -> str | None:
        return self._store.get(TOKEN_KEY) or None

    def is_authenticated(self) -> bool:
        return self.token() is not None

    def user(self) -> dict | None:
        data = parse_json_text(self._store.get(USER_KEY))
        return data if isinstance(data, dict) else None

    def update_profile(self, name: str | None = None, email: str | None = None) -> dict:
        current = self.user() or {}
        if email is not None:
            if not is_valid_email(email):
                raise ValueError("Please enter a valid email address.")
            current["email"] = email.strip()
        if name is not None and name.strip():
            current["name"] = name.strip()
        self._store.set(USER_KEY, json.dumps(current))
        return current


__all__ = ["AuthSession", "PUBLIC_PATHS", "is_valid_email", "requires_auth"]
