"""Unit tests for the key-value store protocols.

Tests in this module verify that the KeyValueStore and ExpiringStore
protocols are runtime checkable and accept conforming implementations.
"""

from version_redirect.storage.base import ExpiringStore, KeyValueStore
from version_redirect.storage.memory import MemoryKeyValueStore


class TestKeyValueStoreProtocol:
    """Test suite for the KeyValueStore protocol definition."""

    def test_is_runtime_checkable(self):
        """KeyValueStore protocol should be runtime checkable."""
        assert getattr(KeyValueStore, "_is_runtime_protocol", False)

    def test_has_required_methods(self):
        assert hasattr(KeyValueStore, "get")
        assert hasattr(KeyValueStore, "put")

    def test_conforming_class(self):
        """A class with get and put should conform to KeyValueStore."""

        class DictStore:
            def __init__(self):
                self.data = {}

            async def get(self, key: str) -> str | None:
                return self.data.get(key)

            async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:  # noqa: ARG002
                self.data[key] = value

        assert isinstance(DictStore(), KeyValueStore)

    def test_missing_put_does_not_conform(self):
        """A read-only class should not conform to KeyValueStore."""

        class ReadOnlyStore:
            async def get(self, key: str) -> str | None:  # noqa: ARG002
                return None

        assert not isinstance(ReadOnlyStore(), KeyValueStore)

    def test_memory_store_conforms(self):
        assert isinstance(MemoryKeyValueStore(), KeyValueStore)


class TestExpiringStoreProtocol:
    """Test suite for the ExpiringStore protocol definition."""

    def test_memory_store_conforms(self):
        assert isinstance(MemoryKeyValueStore(), ExpiringStore)

    def test_plain_store_does_not_conform(self):
        """Stores whose backend expires entries need no sweep."""

        class RemoteStore:
            async def get(self, key: str) -> str | None:  # noqa: ARG002
                return None

            async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:  # noqa: ARG002
                return None

        store = RemoteStore()
        assert isinstance(store, KeyValueStore)
        assert not isinstance(store, ExpiringStore)
