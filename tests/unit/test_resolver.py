"""Unit tests for cache-then-registry version resolution."""

import httpx
import pytest

from version_redirect.core.registry import RegistryClient
from version_redirect.core.resolver import VersionResolver
from version_redirect.models import Resolved, Unresolved, UnresolvedReason, VersionSource


def make_resolver(store, client, config) -> VersionResolver:
    return VersionResolver(store, RegistryClient(client, config), config)


class TestCacheHit:
    @pytest.mark.asyncio
    async def test_cached_version_returned_without_upstream_call(
        self, store, network, config
    ) -> None:
        await store.put("asar", "4.0.1")
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("asar")

        assert result == Resolved(version="4.0.1", source=VersionSource.CACHE)
        assert network.registry_requests == []
        assert store.gets == ["asar"]

    @pytest.mark.asyncio
    async def test_cache_hit_does_not_write(self, store, network, config) -> None:
        await store.put("asar", "4.0.1")
        store.puts.clear()
        async with network.client() as client:
            await make_resolver(store, client, config).resolve("asar")
        assert store.puts == []


class TestCacheMiss:
    @pytest.mark.asyncio
    async def test_upstream_version_adopted_and_cached(self, store, network, config) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert store.puts == [("foo", "5.0.0", 600)]
        assert await store.get("foo") == "5.0.0"

    @pytest.mark.asyncio
    async def test_cached_entry_expires_after_ttl(self, store, clock, network, config) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            await make_resolver(store, client, config).resolve("foo")

        clock.advance(config.cache_ttl_seconds)
        assert await store.get("foo") is None

    @pytest.mark.asyncio
    async def test_empty_cached_value_treated_as_miss(self, store, network, config) -> None:
        await store.put("foo", "")
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert len(network.registry_requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("blank", [" ", "\t", "\n  "])
    async def test_blank_cached_value_treated_as_miss(
        self, blank, store, network, config
    ) -> None:
        await store.put("foo", blank)
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert len(network.registry_requests) == 1
        assert await store.get("foo") == "5.0.0"

    @pytest.mark.asyncio
    async def test_non_success_status_unresolved(self, store, network, config) -> None:
        network.respond("bar", 503)
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("bar")

        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.UPSTREAM_ERROR
        assert "503" in (result.detail or "")
        assert store.puts == []

    @pytest.mark.asyncio
    async def test_transport_error_unresolved(self, store, network, config) -> None:
        network.registry_error = httpx.ConnectTimeout("timed out")
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("bar")

        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.UPSTREAM_ERROR
        assert store.puts == []

    @pytest.mark.asyncio
    async def test_missing_version_unresolved(self, store, network, config) -> None:
        network.respond("bar", 200, json={"name": "@electron/bar", "dist-tags": {}})
        async with network.client() as client:
            result = await make_resolver(store, client, config).resolve("bar")

        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.VERSION_MISSING
        assert store.puts == []

    @pytest.mark.asyncio
    async def test_custom_ttl_used_for_write(self, store, network, config) -> None:
        ttl_config = config.model_copy(update={"cache_ttl_seconds": 30})
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            await make_resolver(store, client, ttl_config).resolve("foo")
        assert store.puts == [("foo", "5.0.0", 30)]


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_read_failure_treated_as_miss(self, failing_store, network, config) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(failing_store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert len(network.registry_requests) == 1

    @pytest.mark.asyncio
    async def test_write_failure_still_resolves(
        self, write_failing_store, network, config
    ) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(write_failing_store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert write_failing_store.puts == []

    @pytest.mark.asyncio
    async def test_read_failure_and_upstream_failure_unresolved(
        self, failing_store, network, config
    ) -> None:
        async with network.client() as client:
            result = await make_resolver(failing_store, client, config).resolve("bar")

        assert isinstance(result, Unresolved)
        assert result.reason is UnresolvedReason.UPSTREAM_ERROR

    @pytest.mark.asyncio
    async def test_client_error_on_read_treated_as_miss(
        self, disconnected_store, network, config
    ) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(disconnected_store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert len(network.registry_requests) == 1

    @pytest.mark.asyncio
    async def test_client_error_on_write_still_resolves(
        self, disconnected_write_store, network, config
    ) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            result = await make_resolver(disconnected_write_store, client, config).resolve("foo")

        assert result == Resolved(version="5.0.0", source=VersionSource.UPSTREAM)
        assert disconnected_write_store.puts == []


class TestIdempotence:
    @pytest.mark.asyncio
    async def test_second_resolution_served_from_cache(self, store, network, config) -> None:
        network.publish("foo", "5.0.0")
        async with network.client() as client:
            resolver = make_resolver(store, client, config)
            first = await resolver.resolve("foo")
            second = await resolver.resolve("foo")

        assert first.version == second.version == "5.0.0"
        assert second.source is VersionSource.CACHE
        assert len(network.registry_requests) == 1
        assert len(store.puts) == 1

    @pytest.mark.asyncio
    async def test_repeated_failure_same_outcome(self, store, network, config) -> None:
        network.respond("bar", 500)
        async with network.client() as client:
            resolver = make_resolver(store, client, config)
            first = await resolver.resolve("bar")
            second = await resolver.resolve("bar")

        assert first == second
        assert store.puts == []
