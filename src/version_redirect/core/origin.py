"""Pass-through forwarding to the fallback origin.

Requests that cannot be redirected are forwarded to the fallback
origin with the same method, path, query string, headers and body. The
origin's response is returned unchanged apart from hop-by-hop headers.

Examples:
    Forwarding a request::

        import httpx

        from version_redirect.core.origin import OriginForwarder

        async with httpx.AsyncClient() as client:
            forwarder = OriginForwarder(client, config)
            response = await forwarder.forward(request)
"""

import httpx

from version_redirect.config import RedirectConfig
from version_redirect.models import EdgeRequest, EdgeResponse
from version_redirect.observability.logging import get_logger
from version_redirect.utils.headers import filter_hop_by_hop_headers, filter_request_headers

logger = get_logger(__name__)


class OriginForwarder:
    """Forwards requests to the fallback origin.

    Attributes:
        client: Shared HTTP client
        config: Service configuration providing the fallback origin
    """

    def __init__(self, client: httpx.AsyncClient, config: RedirectConfig) -> None:
        self.client = client
        self.config = config

    def origin_url(self, request: EdgeRequest) -> str:
        """Build the fallback URL for a request.

        Example:
            >>> forwarder.origin_url(EdgeRequest("GET", "/asar/latest", "x=1"))
            'http://localhost:8080/asar/latest?x=1'
        """
        url = f"{self.config.fallback_origin}{request.path}"
        if request.query_string:
            url = f"{url}?{request.query_string}"
        return url

    async def forward(self, request: EdgeRequest) -> EdgeResponse:
        """Send the request to the fallback origin and return its response.

        Redirects returned by the origin are passed back to the caller, not
        followed.

        Raises:
            httpx.HTTPError: If the fallback origin cannot be reached.
        """
        url = self.origin_url(request)
        outbound = self.client.build_request(
            request.method,
            url,
            headers=filter_request_headers(request.headers),
            content=request.body,
            timeout=self.config.upstream_timeout_seconds,
        )

        response = await self.client.send(outbound, follow_redirects=False)

        # content is already decoded by httpx, so the encoding headers no longer apply
        headers = filter_hop_by_hop_headers(
            response.headers.multi_items(),
            additional={"content-encoding", "content-length"},
        )
        forwarded = EdgeResponse(
            status=response.status_code,
            headers=headers,
            body=response.content,
        )

        logger.debug(
            "origin.forwarded",
            method=request.method,
            url=url,
            status_code=forwarded.status,
            location=forwarded.header("location"),
        )
        return forwarded
