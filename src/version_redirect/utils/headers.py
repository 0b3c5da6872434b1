"""Header filtering utilities for forwarding requests to the fallback origin.

Headers are handled as ordered ``(name, value)`` pairs so that repeated
headers such as Set-Cookie survive the trip unchanged. Mappings are
accepted wherever pairs are.

This module provides functions for:
- Dropping hop-by-hop headers that must not cross a proxy
- Case-insensitive header lookup
"""

from collections.abc import Iterable, Mapping

HeaderPairs = list[tuple[str, str]]
HeadersLike = Mapping[str, str] | Iterable[tuple[str, str]]

# Connection-scoped headers never forwarded between hops (RFC 9110 section 7.6.1)
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "proxy-connection",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
}

# Request headers recomputed by the outbound client
REQUEST_ONLY_HEADERS = {
    "host",
    "content-length",
}


def header_pairs(headers: HeadersLike) -> HeaderPairs:
    """Return headers as a list of ``(name, value)`` pairs.

    Example:
        >>> header_pairs({"Accept": "*/*"})
        [('Accept', '*/*')]
    """
    if isinstance(headers, Mapping):
        return list(headers.items())
    return list(headers)


def filter_hop_by_hop_headers(
    headers: HeadersLike,
    additional: set[str] | None = None,
) -> HeaderPairs:
    """Remove hop-by-hop headers.

    Headers named in any Connection header are dropped as well. Order and
    repeated headers are preserved.

    Args:
        headers: Original headers
        additional: Extra header names to remove (case-insensitive)

    Returns:
        Filtered header pairs

    Example:
        >>> filter_hop_by_hop_headers([
        ...     ("Content-Type", "text/html"),
        ...     ("Connection", "close, X-Trace"),
        ...     ("X-Trace", "abc"),
        ... ])
        [('Content-Type', 'text/html')]
    """
    pairs = header_pairs(headers)
    headers_to_remove = set(HOP_BY_HOP_HEADERS)

    for key, value in pairs:
        if key.lower() == "connection":
            headers_to_remove.update(
                token.strip().lower() for token in value.split(",") if token.strip()
            )

    if additional:
        headers_to_remove.update(h.lower() for h in additional)

    return [(key, value) for key, value in pairs if key.lower() not in headers_to_remove]


def filter_request_headers(headers: HeadersLike) -> HeaderPairs:
    """Prepare incoming request headers for forwarding.

    Drops hop-by-hop headers plus Host and Content-Length, which the
    outbound client sets for the new connection.
    """
    return filter_hop_by_hop_headers(headers, additional=REQUEST_ONLY_HEADERS)


def get_header_value(
    headers: HeadersLike,
    header_name: str,
    default: str | None = None,
) -> str | None:
    """Get the first value of a header with case-insensitive lookup.

    Example:
        >>> get_header_value({"Location": "https://example.com/"}, "location")
        'https://example.com/'
    """
    header_name_lower = header_name.lower()

    for key, value in header_pairs(headers):
        if key.lower() == header_name_lower:
            return value

    return default


def get_header_values(headers: HeadersLike, header_name: str) -> list[str]:
    """Get every value of a repeated header, in order.

    Example:
        >>> get_header_values([("Set-Cookie", "a=1"), ("set-cookie", "b=2")], "set-cookie")
        ['a=1', 'b=2']
    """
    header_name_lower = header_name.lower()
    return [value for key, value in header_pairs(headers) if key.lower() == header_name_lower]
