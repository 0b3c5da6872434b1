"""Standalone ASGI application for the version redirect service.

The application answers every method on every path. Package paths are
redirected to their versioned URL; everything that cannot be redirected is
proxied to the configured fallback origin.

Examples:
    Serving with uvicorn::

        import uvicorn

        from version_redirect.app import create_app
        from version_redirect.config import RedirectConfig

        uvicorn.run(create_app(RedirectConfig.from_env()), port=8000)
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from version_redirect.adapters.asgi import (
    ASGIVersionRedirectMiddleware,
    convert_request,
    convert_response,
)
from version_redirect.config import RedirectConfig
from version_redirect.core.cleanup import start_cleanup_task, stop_cleanup_task
from version_redirect.core.origin import OriginForwarder
from version_redirect.observability.logging import get_logger
from version_redirect.storage.base import ExpiringStore, KeyValueStore
from version_redirect.storage.memory import MemoryKeyValueStore

logger = get_logger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: RedirectConfig | None = None,
    store: KeyValueStore | None = None,
    client: httpx.AsyncClient | None = None,
) -> Starlette:
    """Build the service application.

    Args:
        config: Service configuration (defaults if not provided)
        store: Version cache (a fresh MemoryKeyValueStore if not provided)
        client: HTTP client for registry and origin calls. A client created
            here is closed on shutdown; a supplied one is left to the caller.

    Returns:
        A Starlette application.
    """
    config = config or RedirectConfig()
    store = store if store is not None else MemoryKeyValueStore()
    owns_client = client is None
    http_client = client or httpx.AsyncClient()
    forwarder = OriginForwarder(http_client, config)

    async def pass_through(request: Request) -> Response:
        internal_request = await convert_request(request, read_body=True)
        return convert_response(await forwarder.forward(internal_request))

    @asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        cleanup_task = None
        if isinstance(store, ExpiringStore):
            cleanup_task = await start_cleanup_task(store, config.cleanup_interval_seconds)

        logger.info(
            "app.started",
            service_origin=config.service_origin,
            fallback_origin=config.fallback_origin,
            cache_ttl_seconds=config.cache_ttl_seconds,
        )
        try:
            yield
        finally:
            if cleanup_task is not None:
                await stop_cleanup_task(cleanup_task)
            if owns_client:
                await http_client.aclose()
            logger.info("app.stopped")

    return Starlette(
        routes=[
            Route("/", pass_through, methods=ALL_METHODS),
            Route("/{path:path}", pass_through, methods=ALL_METHODS),
        ],
        middleware=[
            Middleware(
                ASGIVersionRedirectMiddleware,
                store=store,
                client=http_client,
                config=config,
            )
        ],
        lifespan=lifespan,
    )
