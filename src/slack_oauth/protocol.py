"""
Protocol for the key/namespace persistent store used to keep the bot token.

Implementations (e.g. MemoryStorage, JSONFileStorage) store one string value
per (namespace, key) pair. Setting a value of None deletes it.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Storage(Protocol):
    """Protocol for a namespaced string key/value store."""

    def get(self, namespace: str, key: str) -> Optional[str]:
        """Return the stored value, or None when nothing is stored."""
        ...

    def set(self, namespace: str, key: str, value: Optional[str]) -> None:
        """Store value under namespace/key; None removes the entry."""
        ...
