"""Abstract key-value store used for session and cache persistence."""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when a key-value store read or write fails.

    Args:
        key: Key being accessed when the failure occurred.
        message: Human-readable error description.
    """

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        self.message = message
        super().__init__(f"{key}: {message}")


class BaseKeyValueStore(ABC):
    """String key to string value store. Implementations raise StorageError on failure."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous value for the key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Deleting an absent key is a no-op."""
