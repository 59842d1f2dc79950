"""Concrete in-memory implementation of the CacheStore interface.

Entries carry their own expiry and are dropped lazily when read after
expiring. Size is bounded; when full, the oldest-inserted entry is evicted
regardless of how much TTL it has left.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

# Domain Layer Imports
from skillbridge.domain.interfaces.cache import CacheStore
from skillbridge.domain.models.common import CacheKey, CacheTTL

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 100
DEFAULT_TTL_SECONDS = CacheTTL.MEDIUM
KEY_PAIR_SEPARATOR = "|"

@dataclass
class CacheEntry:
    """Internal representation of a cache entry with expiry."""
    value: Any
    created_at: float
    expires_at: float # Clock reading after which the entry is stale

def _serialize_param(value: Any) -> str:
    """Canonical text for a parameter value (stable across dict ordering)."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)

class InMemoryCacheStore(CacheStore):
    """Bounded TTL cache kept in a plain dict (insertion ordered)."""

    def __init__(
        self,
        max_items: int = DEFAULT_MAX_ITEMS,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initializes the cache.

        Args:
            max_items: Maximum number of stored entries.
            default_ttl: TTL in seconds used when `set` is called without one.
            clock: Source of the current time in seconds. Tests pass a fake.
        """
        if max_items < 1:
            raise ValueError(f"max_items must be >= 1, got {max_items}")
        self._store: Dict[CacheKey, CacheEntry] = {}
        self.max_items = max_items
        self.default_ttl = default_ttl
        self._clock = clock
        logger.info(f"InMemoryCacheStore initialized (max={max_items}, default_ttl={default_ttl}s)")

    @property
    def size(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        return len(self._store)

    def create_key(self, prefix: str, params: Mapping[str, Any]) -> CacheKey:
        pairs = KEY_PAIR_SEPARATOR.join(
            f"{name}:{_serialize_param(params[name])}" for name in sorted(params)
        )
        return CacheKey(f"{prefix}:{pairs}")

    def _is_expired(self, entry: CacheEntry, now: Optional[float] = None) -> bool:
        return (self._clock() if now is None else now) > entry.expires_at

    def _live_entry(self, key: CacheKey) -> Optional[CacheEntry]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._is_expired(entry):
            del self._store[key]
            logger.debug(f"Cache entry expired, removed: {key}")
            return None
        return entry

    def get(self, key: CacheKey) -> Optional[Any]:
        entry = self._live_entry(key)
        if entry is None:
            logger.debug(f"Cache miss for key: {key}")
            return None
        logger.debug(f"Cache hit for key: {key}")
        return entry.value

    def set(self, key: CacheKey, value: Any, ttl: Optional[float] = None) -> None:
        now = self._clock()
        effective_ttl = self.default_ttl if ttl is None else ttl

        if key in self._store:
            # Re-insert so an overwritten key counts as the newest entry
            del self._store[key]
        elif len(self._store) >= self.max_items:
            oldest_key = next(iter(self._store))
            del self._store[oldest_key]
            logger.debug(f"Cache full ({self.max_items}), evicted oldest key: {oldest_key}")

        self._store[key] = CacheEntry(value=value, created_at=now, expires_at=now + effective_ttl)
        logger.debug(f"Stored item in cache: key={key}, ttl={effective_ttl}s")

    def has(self, key: CacheKey) -> bool:
        return self._live_entry(key) is not None

    def delete(self, key: CacheKey) -> bool:
        if key in self._store:
            del self._store[key]
            logger.debug(f"Deleted item from cache: key={key}")
            return True
        return False

    def clear(self) -> None:
        self._store.clear()
        logger.info("Cleared in-memory cache.")

    def clear_expired(self) -> int:
        now = self._clock()
        expired_keys = [k for k, entry in self._store.items() if self._is_expired(entry, now)]
        for k in expired_keys:
            del self._store[k]
        if expired_keys:
            logger.debug(f"Swept {len(expired_keys)} expired cache entries.")
        return len(expired_keys)
