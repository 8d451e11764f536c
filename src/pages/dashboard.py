"""Overview counts for every resource, fetched side by side."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Mapping

from app_logging import get_logger
from exceptions import DataFetchError, FetchCancelled
from fetching.cancellation import CancellationToken
from resources.client import ResourceClient

_log = get_logger("assetdesk.pages.dashboard")


class Dashboard:
    def __init__(self, clients: Mapping[str, ResourceClient], max_workers: int = 8):
        self.clients = dict(clients)
        self.max_workers = max_workers

    def load(self, token: CancellationToken | None = None) -> dict[str, int]:
        """Count each resource; a resource that fails counts 0.

        Raises:
            FetchCancelled: ``token`` fired before every count finished.
        """
        token = token or CancellationToken()
        counts = {name: 0 for name in self.clients}
        if not self.clients:
            return counts
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {pool.submit(client.count, token): name for name, client in self.clients.items()}
            for future in as_completed(futures):
                name = futures[future]
                try:
                    counts[name] = future.result()
                except FetchCancelled:
                    continue
                except DataFetchError as e:
                    _log.error("count_failed", extra={"resource": name, "error": str(e)})
        token.raise_if_cancelled()
        return counts


__all__ = ["Dashboard"]
