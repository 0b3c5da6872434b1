"""Framework-agnostic request handling for versioned redirects.

The middleware:
1. Extracts the package name from the request path
2. Redirects unmatched paths to the service root
3. Resolves the package version (cache, then registry)
4. Redirects to the versioned URL when a version is known
5. Otherwise forwards the original request to the fallback origin

Resolution never produces an error response: every failure inside it
degrades to pass-through, so in the worst case the request reaches the
fallback origin as if it had not been intercepted.

Examples:
    Using the middleware directly::

        from version_redirect.core.middleware import VersionRedirectMiddleware

        middleware = VersionRedirectMiddleware(resolver, config)

        async def forward(request):
            return await forwarder.forward(request)

        response = await middleware.process(request, forward)
"""

from collections.abc import Awaitable, Callable

from version_redirect.config import RedirectConfig
from version_redirect.core.path_matcher import match_package_path
from version_redirect.core.redirect import build_redirect_url, redirect_response
from version_redirect.core.resolver import VersionResolver
from version_redirect.models import (
    EdgeRequest,
    EdgeResponse,
    Resolution,
    Resolved,
    Unresolved,
    UnresolvedReason,
)
from version_redirect.observability.logging import get_logger, request_context
from version_redirect.observability.metrics import record_request

logger = get_logger(__name__)

Forward = Callable[[EdgeRequest], Awaitable[EdgeResponse]]


class VersionRedirectMiddleware:
    """Framework-agnostic version redirect middleware.

    Attributes:
        resolver: Resolves package names to versions
        config: Service configuration
    """

    def __init__(self, resolver: VersionResolver, config: RedirectConfig) -> None:
        self.resolver = resolver
        self.config = config

    async def process(self, request: EdgeRequest, forward: Forward) -> EdgeResponse:
        """Handle a request, returning either a redirect or the origin's response.

        Args:
            request: The incoming request
            forward: Async function sending the request to the fallback origin

        Returns:
            EdgeResponse object
        """
        with request_context(method=request.method, path=request.path):
            return await self._handle(request, forward)

    async def _handle(self, request: EdgeRequest, forward: Forward) -> EdgeResponse:
        package_name = match_package_path(request.path)
        if package_name is None:
            logger.debug("redirect.path_unmatched", path=request.path)
            record_request("root_redirect")
            return redirect_response(self.config.service_root)

        resolution = await self._resolve(package_name)

        if isinstance(resolution, Resolved):
            try:
                location = build_redirect_url(
                    self.config,
                    package_name,
                    resolution.version,
                    request.query_string,
                )
            except Exception as e:
                resolution = self._unexpected(package_name, e)
            else:
                logger.info(
                    "redirect.resolved",
                    package=package_name,
                    version=resolution.version,
                    source=resolution.source.value,
                    location=location,
                )
                record_request("redirect")
                return redirect_response(location)

        logger.info(
            "redirect.pass_through",
            package=package_name,
            reason=resolution.reason.value,
            detail=resolution.detail,
        )
        record_request("pass_through")
        return await forward(request)

    async def _resolve(self, package_name: str) -> Resolution:
        try:
            return await self.resolver.resolve(package_name)
        except Exception as e:
            return self._unexpected(package_name, e)

    def _unexpected(self, package_name: str, error: Exception) -> Unresolved:
        logger.warning(
            "redirect.unexpected_error",
            package=package_name,
            error=str(error),
            error_type=type(error).__name__,
        )
        return Unresolved(reason=UnresolvedReason.UNEXPECTED_ERROR, detail=str(error))
