"""
Versioned redirects for package documentation.

This package resolves the package name in a request path to its latest
version, through a key-value cache backed by an upstream registry, and
redirects to the versioned URL. Requests that cannot be resolved are
forwarded unchanged to a fallback origin.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
