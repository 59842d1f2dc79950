"""Service for executing API calls with automatic retries.

Implements exponential backoff with jitter and a per-attempt timeout.
Only transient failures are retried: rate limits (429/quota) and timeouts.
Everything else fails fast so a bad prompt or an auth problem is not
repeated for nothing.
"""

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from skillbridge.domain.errors import ApiCallError, ApiErrorKind
from skillbridge.domain.events.api_events import (
    ApiCallFailed,
    ApiCallInitiated,
    ApiCallSucceeded,
    DomainEvent,
    RetryScheduled,
)
from skillbridge.domain.models.common import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

def _log_event(event: DomainEvent) -> None:
    logger.debug(f"EVENT: {event}")

class ApiRetryService:
    """Handles API call execution with timeouts, retries, and backoff."""

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        jitter: Optional[Callable[[float], float]] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        event_sink: Optional[Callable[[DomainEvent], None]] = None,
    ):
        """Initializes the ApiRetryService.

        Args:
            policy: Default retry policy; callers may override per call.
            jitter: Returns the jitter for a given upper bound. Defaults to
                uniform in [0, bound).
            sleep: Coroutine used to wait between attempts (asyncio.sleep).
            event_sink: Receives domain events. Defaults to debug logging.
        """
        self.policy = policy or RetryPolicy()
        self._jitter = jitter or (lambda bound: random.random() * bound)
        self._sleep = sleep or asyncio.sleep
        self._dispatch_event = event_sink or _log_event

        logger.info(
            f"ApiRetryService initialized: max_retries={self.policy.max_retries}, "
            f"base_delay={self.policy.base_delay_s}s, timeout={self.policy.timeout_s}s"
        )

    async def _attempt(self, operation: Callable[[], Awaitable[T]], timeout_s: Optional[float]) -> T:
        if timeout_s is None:
            return await operation()
        # wait_for cancels the pending call on timeout, aborting the HTTP request
        return await asyncio.wait_for(operation(), timeout=timeout_s)

    async def execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        endpoint_name: Optional[str] = None,
        policy: Optional[RetryPolicy] = None,
    ) -> T:
        """Executes a zero-argument async operation with retries.

        Args:
            operation: Called once per attempt; must create a fresh awaitable.
            endpoint_name: Label for logs and events.
            policy: Overrides the service's default policy for this call.

        Returns:
            The operation's result.

        Raises:
            ApiCallError: The last rate-limit/timeout failure once attempts run
                out, or a non-retryable ApiCallError straight away.
            Exception: Any other error from the operation, unchanged and
                without retrying.
        """
        policy = policy or self.policy
        endpoint = endpoint_name or getattr(operation, "__name__", "operation")
        last_attempt = policy.max_retries - 1

        for attempt in range(policy.max_retries):
            attempt_number = attempt + 1
            self._dispatch_event(ApiCallInitiated(endpoint=endpoint, attempt_number=attempt_number))
            start_time = time.perf_counter()
            try:
                result = await self._attempt(operation, policy.timeout_s)
            except asyncio.TimeoutError as e:
                error: Exception = ApiCallError(
                    ApiErrorKind.TIMEOUT, f"Request timed out after {policy.timeout_s}s"
                )
                error.__cause__ = e
            except Exception as e:
                error = e
            else:
                latency_ms = (time.perf_counter() - start_time) * 1000
                self._dispatch_event(ApiCallSucceeded(
                    endpoint=endpoint,
                    attempt_number=attempt_number,
                    latency_ms=latency_ms,
                    response_summary=getattr(result, "token_usage", None),
                ))
                return result

            retryable = isinstance(error, ApiCallError) and error.retryable
            if attempt == last_attempt or not retryable:
                if retryable:
                    logger.error(
                        f"Max retries ({policy.max_retries}) reached for {endpoint}. Last error: {error}"
                    )
                else:
                    logger.error(f"Non-retryable error calling {endpoint} on attempt {attempt_number}: {error}")
                self._dispatch_event(ApiCallFailed(
                    endpoint=endpoint,
                    attempt_number=attempt_number,
                    error_type=type(error).__name__,
                    error_message=str(error),
                ))
                raise error

            delay = policy.backoff_delay(attempt, self._jitter(policy.max_jitter_s))
            logger.warning(
                f"Retryable error calling {endpoint} on attempt {attempt_number}/{policy.max_retries}: "
                f"{error}. Retrying in {delay:.2f}s..."
            )
            self._dispatch_event(RetryScheduled(endpoint=endpoint, attempt_number=attempt_number, delay_seconds=delay))
            await self._sleep(delay)

        # range(max_retries) is never empty (RetryPolicy enforces >= 1)
        raise RuntimeError(f"Retry loop for {endpoint} exited without a result")
