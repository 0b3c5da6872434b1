"""Utility modules for the version redirect service."""

from .headers import (
    HOP_BY_HOP_HEADERS,
    HeaderPairs,
    filter_hop_by_hop_headers,
    filter_request_headers,
    get_header_value,
    get_header_values,
    header_pairs,
)

__all__ = [
    "filter_hop_by_hop_headers",
    "filter_request_headers",
    "get_header_value",
    "get_header_values",
    "header_pairs",
    "HeaderPairs",
    "HOP_BY_HOP_HEADERS",
]
