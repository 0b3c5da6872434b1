"""Key-value store protocol for the version redirect service.

This module defines the interface the resolver needs from its cache: a
plain string-to-string store with an optional per-entry time-to-live.
Implementations can target edge KV services, Redis, memcached or an
in-process dictionary.

Examples:
    Implementing a custom store::

        from version_redirect.exceptions import StorageError
        from version_redirect.storage.base import KeyValueStore

        class RedisKeyValueStore:
            def __init__(self, client):
                self.client = client

            async def get(self, key: str) -> str | None:
                try:
                    value = await self.client.get(key)
                except RedisError as e:
                    raise StorageError(f"Failed to read {key}: {e}", cause=e) from e
                return value.decode() if value is not None else None

            async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
                try:
                    await self.client.set(key, value, ex=ttl_seconds)
                except RedisError as e:
                    raise StorageError(f"Failed to write {key}: {e}", cause=e) from e

Expiration Handling:
    Entries written with a TTL must be treated as absent by get() once the
    TTL has elapsed. Entries written without a TTL persist until they are
    overwritten. Expiry belongs to the store; callers never delete entries.

Error Handling:
    Backend failures must be raised as StorageError rather than as
    backend-specific exceptions. A missing key is not an error: get()
    returns None.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol defining the cache used to map package names to versions."""

    async def get(self, key: str) -> str | None:
        """Retrieve a value by key.

        Args:
            key: The key to look up.

        Returns:
            The stored value if present and not expired, None otherwise.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store a value, overwriting any existing entry.

        Args:
            key: The key to write.
            value: The value to store.
            ttl_seconds: Seconds until the entry expires. None stores the
                entry until it is overwritten.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...


@runtime_checkable
class ExpiringStore(Protocol):
    """Stores that keep entries in process and need an explicit sweep."""

    async def cleanup_expired(self) -> int:
        """Remove expired entries.

        Returns:
            The number of entries removed.
        """
        ...
