"""Prometheus metrics for the version redirect service.

Metrics include:

- Request counters by outcome (redirect, root_redirect, pass_through)
- Cache lookup counters (hit, miss, error)
- Upstream registry counters and latency
- Cleanup operation tracking

Examples:
    Recording a cache hit::

        from version_redirect.observability.metrics import record_cache_lookup

        record_cache_lookup("hit")

    Recording an upstream call::

        from version_redirect.observability.metrics import record_upstream_request

        record_upstream_request("ok", duration_seconds=0.12)
"""

from prometheus_client import Counter, Histogram

# Labels: outcome (redirect, root_redirect, pass_through)
requests_total = Counter(
    "version_redirect_requests_total",
    "Total number of requests handled, by outcome",
    ["outcome"],
)

# Labels: result (hit, miss, error)
cache_lookups_total = Counter(
    "version_redirect_cache_lookups_total",
    "Total number of cache lookups, by result",
    ["result"],
)

# Labels: result (ok, error, missing_version)
upstream_requests_total = Counter(
    "version_redirect_upstream_requests_total",
    "Total number of upstream registry requests, by result",
    ["result"],
)

upstream_latency_seconds = Histogram(
    "version_redirect_upstream_latency_seconds",
    "Upstream registry request latency in seconds",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

cleanup_operations = Counter(
    "version_redirect_cleanup_operations_total",
    "Total number of cleanup operations performed",
)

cleanup_entries_removed = Counter(
    "version_redirect_cleanup_entries_removed_total",
    "Total number of expired cache entries removed by cleanup",
)


def record_request(outcome: str) -> None:
    """Record a handled request.

    Args:
        outcome: redirect, root_redirect or pass_through
    """
    requests_total.labels(outcome=outcome).inc()


def record_cache_lookup(result: str) -> None:
    """Record a cache lookup.

    Args:
        result: hit, miss or error
    """
    cache_lookups_total.labels(result=result).inc()


def record_upstream_request(result: str, duration_seconds: float) -> None:
    """Record an upstream registry request and its latency.

    Args:
        result: ok, error or missing_version
        duration_seconds: Wall time spent on the request
    """
    upstream_requests_total.labels(result=result).inc()
    upstream_latency_seconds.observe(duration_seconds)


def record_cleanup(entries_removed: int) -> None:
    """Record a cleanup operation.

    Args:
        entries_removed: Number of expired entries removed
    """
    cleanup_operations.inc()
    cleanup_entries_removed.inc(entries_removed)
