"""Caching Service Implementation.

Provides the in-memory CacheStore with TTL expiry and bounded size, and the
CachedFetcher combinator that memoizes async fetch functions in it.
Bounded Context: Cache Management
"""
