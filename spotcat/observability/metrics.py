from __future__ import annotations

from prometheus_client import Counter

AUTH_EXCHANGES = Counter(
    "spotcat_auth_exchanges_total",
    "Total number of client-credentials exchanges sent to the token endpoint.",
)
AUTH_FAILURES = Counter(
    "spotcat_auth_failures_total",
    "Total number of client-credentials exchanges that failed.",
)
CATALOG_FETCH_FAILURES = Counter(
    "spotcat_catalog_fetch_failures_total",
    "Catalog calls mapped to an empty result, by operation and failure kind.",
    ["operation", "kind"],
)
CACHE_HITS = Counter(
    "spotcat_cache_hits_total",
    "Catalog results served from the in-memory result cache.",
    ["operation"],
)
CACHE_MISSES = Counter(
    "spotcat_cache_misses_total",
    "Catalog lookups that had to reach the provider.",
    ["operation"],
)


def record_auth_exchange() -> None:
    AUTH_EXCHANGES.inc()


def record_auth_failure() -> None:
    AUTH_FAILURES.inc()


def record_fetch_failure(operation: str, kind: str) -> None:
    CATALOG_FETCH_FAILURES.labels(operation=operation, kind=kind).inc()


def record_cache_lookup(operation: str, hit: bool) -> None:
    counter = CACHE_HITS if hit else CACHE_MISSES
    counter.labels(operation=operation).inc()
