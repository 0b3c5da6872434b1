"""Upstream registry client.

Queries the package registry for the latest published version of a
package. Exactly one request is made per call; there are no retries.

Examples:
    Looking up a version::

        import httpx

        from version_redirect.config import RedirectConfig
        from version_redirect.core.registry import RegistryClient

        async with httpx.AsyncClient() as client:
            registry = RegistryClient(client, RedirectConfig())
            version = await registry.fetch_latest_version("asar")
"""

import time
from typing import Any

import httpx

from version_redirect.config import RedirectConfig
from version_redirect.exceptions import UpstreamError
from version_redirect.observability.logging import get_logger
from version_redirect.observability.metrics import record_upstream_request

logger = get_logger(__name__)


def extract_version(payload: Any) -> str | None:
    """Pull a usable version out of a registry response body.

    Args:
        payload: Decoded JSON body.

    Returns:
        The ``version`` field if it is a non-blank string, None otherwise.

    Example:
        >>> extract_version({"name": "asar", "version": "4.0.1"})
        '4.0.1'
        >>> extract_version({"version": ""}) is None
        True
    """
    if not isinstance(payload, dict):
        return None

    version = payload.get("version")
    if not isinstance(version, str) or not version.strip():
        return None

    return version


class RegistryClient:
    """Client for the registry's latest-version endpoint.

    Attributes:
        client: Shared HTTP client used for the request
        config: Service configuration providing the URL template and timeout
    """

    def __init__(self, client: httpx.AsyncClient, config: RedirectConfig) -> None:
        self.client = client
        self.config = config

    async def fetch_latest_version(self, package_name: str) -> str | None:
        """Fetch the latest version of a package.

        Args:
            package_name: Package name, inserted verbatim into the URL.

        Returns:
            The version string, or None if the registry answered successfully
            without a usable version.

        Raises:
            UpstreamError: If the registry is unreachable, returns a
                non-success status, or returns a body that is not JSON.
        """
        url = self.config.registry_url(package_name)
        started = time.perf_counter()

        try:
            response = await self.client.get(
                url,
                headers={"accept": "application/json"},
                timeout=self.config.upstream_timeout_seconds,
            )
        except httpx.HTTPError as e:
            record_upstream_request("error", time.perf_counter() - started)
            raise UpstreamError(
                message=f"Registry request for {package_name} failed: {e}",
                package_name=package_name,
                cause=e,
            ) from e

        elapsed = time.perf_counter() - started

        if not response.is_success:
            record_upstream_request("error", elapsed)
            raise UpstreamError(
                message=f"Registry returned {response.status_code} for {package_name}",
                package_name=package_name,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            record_upstream_request("error", elapsed)
            raise UpstreamError(
                message=f"Registry returned an unparsable body for {package_name}",
                package_name=package_name,
                status_code=response.status_code,
                cause=e,
            ) from e

        version = extract_version(payload)
        record_upstream_request("ok" if version is not None else "missing_version", elapsed)

        logger.debug(
            "registry.fetched",
            package=package_name,
            url=url,
            status_code=response.status_code,
            version=version,
        )
        return version
