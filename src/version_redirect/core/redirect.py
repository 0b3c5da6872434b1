"""Redirect target construction.

A versioned redirect is composed from the service origin, the package
name, the version and the index document, with the original query string
reattached unchanged::

    https://packages.electronjs.org/asar/v4.0.1/index.html?foo=bar
"""

from version_redirect.config import RedirectConfig
from version_redirect.models import EdgeResponse

REDIRECT_STATUS = 302


def build_redirect_url(
    config: RedirectConfig,
    package_name: str,
    version: str,
    query_string: str = "",
) -> str:
    """Build the versioned URL for a resolved package.

    Args:
        config: Service configuration providing origin and index document
        package_name: Package name, used verbatim as a path segment
        version: Resolved version, must be non-empty
        query_string: Original query string without leading '?'

    Returns:
        The absolute redirect URL.

    Raises:
        ValueError: If version is empty.

    Example:
        >>> build_redirect_url(RedirectConfig(), "asar", "4.0.1", "foo=bar")
        'https://packages.electronjs.org/asar/v4.0.1/index.html?foo=bar'
    """
    if not version:
        raise ValueError(f"Cannot build a redirect for {package_name} without a version")

    url = f"{config.service_origin}/{package_name}/v{version}/{config.index_document}"
    if query_string:
        url = f"{url}?{query_string}"
    return url


def redirect_response(location: str, status: int = REDIRECT_STATUS) -> EdgeResponse:
    """Build an empty-bodied redirect response.

    Example:
        >>> redirect_response("https://example.com/").headers
        [('location', 'https://example.com/')]
    """
    return EdgeResponse(status=status, headers=[("location", location)], body=b"")
