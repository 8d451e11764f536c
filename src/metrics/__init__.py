"""Metrics module for backend fetch monitoring.

Usage:
    from metrics import record_attempt

    record_attempt('location', 'ok', 0.12)
"""

from .fetch_metrics import (
    # Counter metrics
    fetch_attempts,
    fetch_fallbacks,
    list_failures,
    mutations,
    # Histogram metrics
    fetch_duration,
    # Update functions
    record_attempt,
    record_fallback,
    record_list_failure,
    record_mutation,
)

__all__ = [
    'fetch_attempts',
    'fetch_fallbacks',
    'list_failures',
    'mutations',
    'fetch_duration',
    'record_attempt',
    'record_fallback',
    'record_list_failure',
    'record_mutation',
]
