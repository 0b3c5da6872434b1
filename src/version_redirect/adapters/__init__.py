"""Framework adapters for the version redirect service.

- asgi.py: ASGI middleware for FastAPI, Starlette, etc.

The adapters convert between framework-specific request/response objects
and the service's internal representation.
"""

from version_redirect.adapters.asgi import ASGIVersionRedirectMiddleware

__all__ = ["ASGIVersionRedirectMiddleware"]
