"""API Resilience Implementations.

Contains the retry service: per-attempt timeouts and exponential backoff
with jitter for rate-limited or timed-out AI calls.
Bounded Context: API Resilience
"""
