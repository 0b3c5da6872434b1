"""Core logic for versioned redirects.

This package contains the request handling for the service:
- Path matcher: package name extraction from the request path
- Registry: latest-version lookup against the upstream registry
- Resolver: cache-then-registry resolution with cache population
- Redirect: versioned URL construction
- Origin: pass-through forwarding to the fallback origin
- Middleware: framework-agnostic orchestration of the above
- Cleanup: periodic sweep of expired in-process cache entries
"""

from version_redirect.core.middleware import VersionRedirectMiddleware
from version_redirect.core.origin import OriginForwarder
from version_redirect.core.path_matcher import match_package_path
from version_redirect.core.redirect import build_redirect_url, redirect_response
from version_redirect.core.registry import RegistryClient
from version_redirect.core.resolver import VersionResolver

__all__ = [
    "VersionRedirectMiddleware",
    "OriginForwarder",
    "RegistryClient",
    "VersionResolver",
    "build_redirect_url",
    "match_package_path",
    "redirect_response",
]
