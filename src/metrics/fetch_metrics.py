"""Prometheus metrics for backend list fetches and mutations.

Exposes:
- assetdesk_fetch_attempts_total: every HTTP attempt, by outcome (ok, error, cancelled)
- assetdesk_fetch_fallbacks_total: candidate URLs tried after the first one
- assetdesk_list_failures_total: list loads where every candidate URL failed
- assetdesk_fetch_duration_seconds: latency of successful attempts
- assetdesk_mutations_total: create/update/delete/upload calls, by outcome

Metrics use labels: resource, outcome, action
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


fetch_attempts = Counter(
    'assetdesk_fetch_attempts_total',
    'HTTP attempts issued by the list fetcher',
    ['resource', 'outcome'],
)

fetch_fallbacks = Counter(
    'assetdesk_fetch_fallbacks_total',
    'Candidate URLs tried after the first candidate',
    ['resource'],
)

list_failures = Counter(
    'assetdesk_list_failures_total',
    'List loads where every candidate URL failed',
    ['resource'],
)

mutations = Counter(
    'assetdesk_mutations_total',
    'Create/update/delete/upload calls',
    ['resource', 'action', 'outcome'],
)

fetch_duration = Histogram(
    'assetdesk_fetch_duration_seconds',
    'Latency of successful fetch attempts',
    ['resource'],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0),
)


def record_attempt(resource: str, outcome: str, seconds: float | None = None):
    fetch_attempts.labels(resource=resource, outcome=outcome).inc()
    if seconds is not None and outcome == 'ok':
        fetch_duration.labels(resource=resource).observe(seconds)


def record_fallback(resource: str):
    fetch_fallbacks.labels(resource=resource).inc()


def record_list_failure(resource: str):
    list_failures.labels(resource=resource).inc()
    logger.debug(f"Recorded list failure for {resource}")


def record_mutation(resource: str, action: str, outcome: str):
    mutations.labels(resource=resource, action=action, outcome=outcome).inc()
