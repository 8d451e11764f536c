"""Cooperative cancellation tokens.

A token is observed, never forced: code in flight keeps running until it
next checks ``cancelled`` (or calls ``raise_if_cancelled``). Tokens compose
into parent/child chains so a request-scoped token can be cancelled either
by its own timer or by the page that owns it.
"""
from __future__ import annotations

import threading
from typing import Any, Callable

from exceptions import FetchCancelled


class CancellationToken:
    def __init__(self, parent: CancellationToken | None = None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._children: list[CancellationToken] = []
        self._callbacks: list[Callable[[], Any]] = []
        self._parent = parent
        self._reason: str | None = None
        if parent is not None:
            parent._adopt(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason or "cancelled"
            self._event.set()
            children = list(self._children)
            callbacks, self._callbacks = self._callbacks, []
        for child in children:
            child.cancel(self._reason)
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], Any]) -> None:
        """Run ``callback`` once when the token is cancelled (at once if it already is)."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise FetchCancelled(self._reason)

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True early if cancelled."""
        return self._event.wait(max(seconds, 0.0))

    def child(self) -> CancellationToken:
        return CancellationToken(parent=self)

    def detach(self) -> None:
        parent = self._parent
        if parent is None:
            return
        with parent._lock:
            if self in parent._children:
                parent._children.remove(self)
        self._parent = None

    def _adopt(self, child: CancellationToken) -> None:
        with self._lock:
            already = self._event.is_set()
            if not already:
                self._children.append(child)
        if already:
            child.cancel(self._reason)

    def __repr__(self) -> str:
        state = f"cancelled:{self._reason}" if self.cancelled else "active"
        return f"<CancellationToken {state}>"


__all__ = ["CancellationToken"]
