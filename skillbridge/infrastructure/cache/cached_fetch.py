"""Cache-aware fetch combinator.

Ties a CacheStore to an async fetch function: derive the key, check the
cache, on miss call the function (optionally through the ApiRetryService),
store the result with a TTL and return it. Concurrent misses for the same
key are not coalesced; each caller invokes the fetch function.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from skillbridge.domain.interfaces.cache import CacheStore
from skillbridge.domain.models.common import CacheKey, CacheTTL
from skillbridge.infrastructure.resilience.api_retry import ApiRetryService

logger = logging.getLogger(__name__)

T = TypeVar("T")

KeyBuilder = Callable[..., CacheKey]


@dataclass
class FetchResult(Generic[T]):
    """A fetched value and whether it was served from the cache."""
    value: T
    from_cache: bool
    key: CacheKey


def prefixed_key_builder(cache: CacheStore, prefix: str) -> KeyBuilder:
    """Returns a key builder deriving params from positional and keyword args."""
    def build(*args: Any, **kwargs: Any) -> CacheKey:
        params = {f"arg{i}": arg for i, arg in enumerate(args)}
        params.update(kwargs)
        return cache.create_key(prefix, params)
    return build


class CachedFetcher(Generic[T]):
    """Memoizes an async fetch function in a CacheStore."""

    def __init__(
        self,
        cache: CacheStore,
        fetch_fn: Callable[..., Awaitable[T]],
        key_builder: KeyBuilder,
        ttl: float = CacheTTL.MEDIUM,
        retry_service: Optional[ApiRetryService] = None,
        name: Optional[str] = None,
    ):
        self.cache = cache
        self.fetch_fn = fetch_fn
        self.key_builder = key_builder
        self.ttl = ttl
        self.retry_service = retry_service
        self.name = name or getattr(fetch_fn, "__name__", "fetch")

    async def fetch(self, *args: Any, **kwargs: Any) -> FetchResult[T]:
        """Returns the cached value for these arguments, fetching on a miss.

        Raises:
            Whatever the fetch function (or the retry service) raises.
            Nothing is cached in that case.
        """
        key = self.key_builder(*args, **kwargs)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"Returning cached result for {self.name}")
            return FetchResult(value=cached, from_cache=True, key=key)

        if self.retry_service is not None:
            value = await self.retry_service.execute_with_retry(
                lambda: self.fetch_fn(*args, **kwargs), endpoint_name=self.name
            )
        else:
            value = await self.fetch_fn(*args, **kwargs)

        self.cache.set(key, value, ttl=self.ttl)
        return FetchResult(value=value, from_cache=False, key=key)

    async def refetch(self, *args: Any, **kwargs: Any) -> FetchResult[T]:
        """Drops any cached value for these arguments, then fetches."""
        self.invalidate(*args, **kwargs)
        return await self.fetch(*args, **kwargs)

    def invalidate(self, *args: Any, **kwargs: Any) -> bool:
        return self.cache.delete(self.key_builder(*args, **kwargs))

    def is_cached(self, *args: Any, **kwargs: Any) -> bool:
        return self.cache.has(self.key_builder(*args, **kwargs))
