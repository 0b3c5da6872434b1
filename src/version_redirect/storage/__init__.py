"""Key-value stores for the version redirect service.

This package provides the cache backends mapping package names to their
latest versions. All stores implement the KeyValueStore protocol defined
in base.py.

Available Stores:
    - MemoryKeyValueStore: In-process dictionary with per-entry TTL
"""

from version_redirect.storage.base import ExpiringStore, KeyValueStore
from version_redirect.storage.memory import MemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "ExpiringStore",
    "MemoryKeyValueStore",
]
