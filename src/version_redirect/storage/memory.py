"""In-memory key-value store with per-entry expiry.

This module provides a dictionary-backed implementation of the
KeyValueStore protocol. It is suitable for:
    - Single-process deployments
    - Development and testing

Expired entries are dropped lazily on read and in bulk by
cleanup_expired(), which the background cleanup task calls periodically.

Concurrency:
    All operations run on the event loop without awaiting between reading
    and writing an entry, so no locks are needed.

Examples:
    Basic usage::

        from version_redirect.storage.memory import MemoryKeyValueStore

        store = MemoryKeyValueStore()
        await store.put("asar", "4.0.1", ttl_seconds=600)
        await store.get("asar")  # "4.0.1"

    Deterministic expiry in tests::

        now = [0.0]
        store = MemoryKeyValueStore(clock=lambda: now[0])
        await store.put("asar", "4.0.1", ttl_seconds=10)
        now[0] = 11.0
        await store.get("asar")  # None
"""

import time
from collections.abc import Callable
from typing import NamedTuple

from version_redirect.storage.base import KeyValueStore


class _Entry(NamedTuple):
    value: str
    expires_at: float | None


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed key-value store with optional TTL per entry.

    Attributes:
        _store: Dictionary mapping keys to entries.
        _clock: Monotonic time source in seconds.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty store.

        Args:
            clock: Time source used to compute and check expiry.
        """
        self._store: dict[str, _Entry] = {}
        self._clock = clock

    def _is_expired(self, entry: _Entry, now: float) -> bool:
        return entry.expires_at is not None and entry.expires_at <= now

    async def get(self, key: str) -> str | None:
        """Retrieve a value, dropping it first if it has expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        if self._is_expired(entry, self._clock()):
            del self._store[key]
            return None

        return entry.value

    async def put(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store a value, overwriting any previous entry and its expiry.

        Raises:
            ValueError: If ttl_seconds is given and not positive.
        """
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")

        expires_at = self._clock() + ttl_seconds if ttl_seconds is not None else None
        self._store[key] = _Entry(value=value, expires_at=expires_at)

    async def cleanup_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            The number of entries removed.
        """
        now = self._clock()
        expired_keys = [key for key, entry in self._store.items() if self._is_expired(entry, now)]

        for key in expired_keys:
            del self._store[key]

        return len(expired_keys)

    def __len__(self) -> int:
        return len(self._store)
