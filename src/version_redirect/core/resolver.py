"""Two-tier version resolution: cache first, then the upstream registry.

The resolver turns a package name into a Resolution:

1. Read the cache. A hit is returned without contacting the registry.
2. On a miss, query the registry once.
3. On an upstream success with a usable version, write it to the cache
   with the configured TTL and return it.
4. Otherwise return Unresolved with the reason.

Store failures never abort resolution, whatever the backend raises: a
failed read is a miss and a failed write is skipped. A blank cached value
is a miss as well. Registry failures produce Unresolved results instead of
exceptions.

Examples:
    Resolving a package::

        from version_redirect.core.resolver import VersionResolver
        from version_redirect.models import Resolved

        resolver = VersionResolver(store, registry, config)
        result = await resolver.resolve("asar")
        if isinstance(result, Resolved):
            print(result.version, result.source)
"""

from version_redirect.config import RedirectConfig
from version_redirect.core.registry import RegistryClient
from version_redirect.exceptions import UpstreamError
from version_redirect.models import (
    Resolution,
    Resolved,
    Unresolved,
    UnresolvedReason,
    VersionSource,
)
from version_redirect.observability.logging import get_logger
from version_redirect.observability.metrics import record_cache_lookup
from version_redirect.storage.base import KeyValueStore

logger = get_logger(__name__)


class VersionResolver:
    """Resolves package names to versions through the cache and registry.

    Attributes:
        store: Cache mapping package names to versions
        registry: Upstream registry client
        config: Service configuration (cache TTL)
    """

    def __init__(
        self,
        store: KeyValueStore,
        registry: RegistryClient,
        config: RedirectConfig,
    ) -> None:
        self.store = store
        self.registry = registry
        self.config = config

    async def resolve(self, package_name: str) -> Resolution:
        """Resolve a package name to its latest version.

        Args:
            package_name: Package name used verbatim as cache key.

        Returns:
            Resolved with the version and its source, or Unresolved with the
            reason resolution failed.
        """
        cached = await self._read_cache(package_name)
        if cached:
            logger.info("resolve.cache_hit", package=package_name, version=cached)
            return Resolved(version=cached, source=VersionSource.CACHE)

        logger.info("resolve.cache_miss", package=package_name)

        try:
            version = await self.registry.fetch_latest_version(package_name)
        except UpstreamError as e:
            logger.warning(
                "resolve.upstream_failed",
                package=package_name,
                status_code=e.status_code,
                error=e.message,
            )
            return Unresolved(reason=UnresolvedReason.UPSTREAM_ERROR, detail=e.message)

        if version is None:
            logger.warning("resolve.version_missing", package=package_name)
            return Unresolved(
                reason=UnresolvedReason.VERSION_MISSING,
                detail=f"Registry response for {package_name} has no usable version",
            )

        await self._write_cache(package_name, version)
        return Resolved(version=version, source=VersionSource.UPSTREAM)

    async def _read_cache(self, package_name: str) -> str | None:
        try:
            value = await self.store.get(package_name)
        except Exception as e:
            record_cache_lookup("error")
            logger.warning(
                "resolve.cache_read_failed",
                package=package_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if not value or not value.strip():
            record_cache_lookup("miss")
            return None

        record_cache_lookup("hit")
        return value

    async def _write_cache(self, package_name: str, version: str) -> None:
        try:
            await self.store.put(
                package_name,
                version,
                ttl_seconds=self.config.cache_ttl_seconds,
            )
        except Exception as e:
            logger.warning(
                "resolve.cache_write_failed",
                package=package_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        logger.info(
            "resolve.cache_updated",
            package=package_name,
            version=version,
            ttl_seconds=self.config.cache_ttl_seconds,
        )
