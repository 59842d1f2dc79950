"""Interface for caching mechanisms.

Defines the contract for storing, retrieving, and expiring cached data.
All operations are synchronous: on a single event loop they cannot be
interleaved mid-mutation.
"""

import abc
from typing import Any, Mapping, Optional

# Import relevant domain models
from ..models.common import CacheKey


class CacheStore(abc.ABC):
    """Abstract Base Class for key/value caches with per-entry expiry."""

    @abc.abstractmethod
    def create_key(self, prefix: str, params: Mapping[str, Any]) -> CacheKey:
        """Builds a deterministic key from a prefix and call parameters.

        Args:
            prefix: Category of the cached data (e.g. 'skills-analysis').
            params: Logical parameters of the call. Ordering is irrelevant.

        Returns:
            The same key for equal params, a different key otherwise.
        """
        pass

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[Any]:
        """Returns the cached value, or None if missing or expired."""
        pass

    @abc.abstractmethod
    def set(self, key: CacheKey, value: Any, ttl: Optional[float] = None) -> None:
        """Stores a value.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            ttl: Time-to-live in seconds (uses the store default if None).
        """
        pass

    @abc.abstractmethod
    def has(self, key: CacheKey) -> bool:
        """Returns True if the key holds an unexpired value."""
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> bool:
        """Removes a key. Returns False if it was not present."""
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes all entries."""
        pass

    @abc.abstractmethod
    def clear_expired(self) -> int:
        """Removes every expired entry and returns how many were removed."""
        pass
