"""ASGI middleware adapter for FastAPI and Starlette applications.

The middleware puts versioned redirects in front of any ASGI application.
The wrapped application plays the role of the fallback origin: requests
that cannot be redirected are passed to it unchanged.

The middleware:
1. Converts ASGI requests to the internal EdgeRequest format
2. Processes them through the core middleware
3. Converts internal responses back to Starlette responses

Examples:
    FastAPI integration::

        import httpx
        from fastapi import FastAPI

        from version_redirect.adapters.asgi import ASGIVersionRedirectMiddleware
        from version_redirect.config import RedirectConfig
        from version_redirect.storage.memory import MemoryKeyValueStore

        app = FastAPI()

        app.add_middleware(
            ASGIVersionRedirectMiddleware,
            store=MemoryKeyValueStore(),
            client=httpx.AsyncClient(),
            config=RedirectConfig(),
        )
"""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response

from version_redirect.config import RedirectConfig
from version_redirect.core.middleware import VersionRedirectMiddleware
from version_redirect.core.registry import RegistryClient
from version_redirect.core.resolver import VersionResolver
from version_redirect.models import EdgeRequest, EdgeResponse
from version_redirect.storage.base import KeyValueStore


def build_middleware(
    store: KeyValueStore,
    client: httpx.AsyncClient,
    config: RedirectConfig,
) -> VersionRedirectMiddleware:
    """Wire the core middleware from its collaborators."""
    resolver = VersionResolver(store, RegistryClient(client, config), config)
    return VersionRedirectMiddleware(resolver, config)


def request_path(request: StarletteRequest) -> str:
    """Return the request path as received, still percent-encoded.

    Package names are used verbatim, so the raw path is preferred over the
    decoded one when the server provides it.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.split(b"?", 1)[0].decode("latin-1")
    return request.url.path


async def convert_request(request: StarletteRequest, read_body: bool = False) -> EdgeRequest:
    """Convert a Starlette request to the internal EdgeRequest format.

    Args:
        request: Starlette request object
        read_body: Read the body into the EdgeRequest. Only needed when the
            request is forwarded by the service itself.
    """
    body = await request.body() if read_body else b""

    return EdgeRequest(
        method=request.method,
        path=request_path(request),
        query_string=request.url.query or "",
        headers=request.headers.items(),
        body=body,
    )


def convert_response(response: EdgeResponse) -> Response:
    """Convert an internal EdgeResponse to a Starlette Response.

    Every header pair is appended, so repeated headers such as Set-Cookie
    are kept. Content-Length is recomputed from the body.
    """
    converted = Response(content=response.body, status_code=response.status)
    for name, value in response.headers:
        if name.lower() != "content-length":
            converted.headers.append(name, value)
    return converted


class ASGIVersionRedirectMiddleware(BaseHTTPMiddleware):
    """ASGI middleware redirecting package paths to versioned URLs.

    Attributes:
        config: Configuration object
        middleware: Core middleware instance
    """

    def __init__(
        self,
        app: Any,
        store: KeyValueStore,
        client: httpx.AsyncClient,
        config: RedirectConfig | None = None,
    ) -> None:
        """Initialize the ASGI middleware.

        Args:
            app: The wrapped ASGI application, used as fallback origin
            store: Cache mapping package names to versions
            client: HTTP client used for registry lookups
            config: Configuration object (uses defaults if not provided)
        """
        super().__init__(app)
        self.config = config or RedirectConfig()
        self.middleware = build_middleware(store, client, self.config)

    async def dispatch(
        self,
        request: StarletteRequest,
        call_next: Callable[[StarletteRequest], Awaitable[Response]],
    ) -> Response:
        """Process a request, redirecting it or passing it to the wrapped app."""
        internal_request = await convert_request(request)

        async def forward(_req: EdgeRequest) -> EdgeResponse:
            response = await call_next(request)

            body = b""
            if hasattr(response, "body_iterator"):
                async for chunk in response.body_iterator:
                    body += chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)
            else:
                body = bytes(getattr(response, "body", b""))

            return EdgeResponse(
                status=response.status_code,
                headers=response.headers.items(),
                body=body,
            )

        result = await self.middleware.process(internal_request, forward)
        return convert_response(result)
