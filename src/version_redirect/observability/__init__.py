"""Observability utilities for the version redirect service.

- Prometheus metrics for request outcomes, cache and upstream behavior
- Structured logging with contextual information
"""

from version_redirect.observability.logging import (
    configure_logging,
    configure_logging_from_config,
    get_logger,
    request_context,
)
from version_redirect.observability.metrics import (
    record_cache_lookup,
    record_cleanup,
    record_request,
    record_upstream_request,
)

__all__ = [
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
    "request_context",
    "record_request",
    "record_cache_lookup",
    "record_upstream_request",
    "record_cleanup",
]
