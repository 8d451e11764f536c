class DataFetchError(RuntimeError):
    def __init__(self, source: str, message: str):  # noqa: D401
        super().__init__(f"[{source}] {message}")
        self.source = source
        self.message = message


class FetchTimeout(DataFetchError):
    """The request did not complete within its timeout."""


class BadStatusError(DataFetchError):
    def __init__(self, source: str, status_code: int, message: str | None = None):
        super().__init__(source, message or f"HTTP {status_code}")
        self.status_code = status_code


class MutationError(DataFetchError):
    """A create/update/delete/upload call was rejected or unreachable."""


class FetchCancelled(Exception):
    """Raised when a cancellation token fires.

    Not a ``DataFetchError``: cancellation is normal control flow and callers
    swallow it instead of reporting it.
    """

    def __init__(self, reason: str | None = None):
        super().__init__(reason or "cancelled")
        self.reason = reason


__all__ = ["DataFetchError", "FetchTimeout", "BadStatusError", "MutationError", "FetchCancelled"]
