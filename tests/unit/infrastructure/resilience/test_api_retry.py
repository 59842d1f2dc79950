import asyncio

import pytest
from unittest.mock import AsyncMock

from skillbridge.domain.errors import ApiCallError, ApiErrorKind, ConfigurationError
from skillbridge.domain.events.api_events import (
    ApiCallFailed,
    ApiCallInitiated,
    ApiCallSucceeded,
    RetryScheduled,
)
from skillbridge.domain.models.common import RetryPolicy
from skillbridge.infrastructure.resilience.api_retry import ApiRetryService


def rate_limited():
    return ApiCallError(ApiErrorKind.RATE_LIMITED, "429 quota exceeded", status_code=429)


@pytest.fixture
def events():
    return []

@pytest.fixture
def service(recording_sleep, events):
    return ApiRetryService(
        policy=RetryPolicy(max_retries=3, base_delay_s=1.0, timeout_s=5.0),
        jitter=lambda bound: 0.0,
        sleep=recording_sleep,
        event_sink=events.append,
    )


@pytest.mark.asyncio
async def test_success_on_first_attempt(service, recording_sleep, events):
    operation = AsyncMock(return_value="ok")

    assert await service.execute_with_retry(operation, endpoint_name="demo") == "ok"

    operation.assert_awaited_once()
    assert recording_sleep.delays == []
    assert [type(e) for e in events] == [ApiCallInitiated, ApiCallSucceeded]

@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    ApiCallError(ApiErrorKind.AUTHENTICATION, "bad key", status_code=401),
    ApiCallError(ApiErrorKind.INVALID_REQUEST, "bad prompt", status_code=400),
    ConfigurationError("missing key"),
    ValueError("unexpected"),
])
async def test_non_retryable_errors_fail_fast(service, recording_sleep, error):
    operation = AsyncMock(side_effect=error)

    with pytest.raises(type(error)) as exc_info:
        await service.execute_with_retry(operation)

    assert exc_info.value is error
    operation.assert_awaited_once()
    assert recording_sleep.delays == []

@pytest.mark.asyncio
async def test_exhaustion_raises_last_error_with_growing_delays(service, recording_sleep, events):
    errors = [rate_limited() for _ in range(3)]
    operation = AsyncMock(side_effect=errors)

    with pytest.raises(ApiCallError) as exc_info:
        await service.execute_with_retry(operation, endpoint_name="demo")

    assert exc_info.value is errors[-1]
    assert operation.await_count == 3
    assert recording_sleep.delays == [1.0, 2.0]
    assert all(a < b for a, b in zip(recording_sleep.delays, recording_sleep.delays[1:]))
    assert isinstance(events[-1], ApiCallFailed)
    assert [e.delay_seconds for e in events if isinstance(e, RetryScheduled)] == [1.0, 2.0]

@pytest.mark.asyncio
async def test_rate_limited_twice_then_success(service, recording_sleep):
    operation = AsyncMock(side_effect=[rate_limited(), rate_limited(), "analysis"])

    assert await service.execute_with_retry(operation) == "analysis"
    assert operation.await_count == 3
    assert recording_sleep.delays == [1.0, 2.0]

@pytest.mark.asyncio
async def test_timeout_is_retried(recording_sleep):
    calls = []

    async def slow_then_fast():
        calls.append(1)
        if len(calls) == 1:
            await asyncio.sleep(10)
        return "done"

    service = ApiRetryService(
        policy=RetryPolicy(max_retries=2, base_delay_s=0.5, timeout_s=0.01),
        jitter=lambda bound: 0.0,
        sleep=recording_sleep,
    )

    assert await service.execute_with_retry(slow_then_fast) == "done"
    assert len(calls) == 2
    assert recording_sleep.delays == [0.5]

@pytest.mark.asyncio
async def test_timeout_exhaustion_raises_timeout_error(recording_sleep):
    async def never_finishes():
        await asyncio.sleep(10)

    service = ApiRetryService(
        policy=RetryPolicy(max_retries=2, base_delay_s=0.0, timeout_s=0.01),
        jitter=lambda bound: 0.0,
        sleep=recording_sleep,
    )

    with pytest.raises(ApiCallError) as exc_info:
        await service.execute_with_retry(never_finishes)

    assert exc_info.value.kind is ApiErrorKind.TIMEOUT
    assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)

@pytest.mark.asyncio
async def test_jitter_is_added_to_delay(recording_sleep):
    bounds = []

    def jitter(bound):
        bounds.append(bound)
        return 0.25

    service = ApiRetryService(
        policy=RetryPolicy(max_retries=2, base_delay_s=1.0, max_jitter_s=0.5),
        jitter=jitter,
        sleep=recording_sleep,
    )
    operation = AsyncMock(side_effect=[rate_limited(), "ok"])

    await service.execute_with_retry(operation)

    assert bounds == [0.5]
    assert recording_sleep.delays == [1.25]

@pytest.mark.asyncio
async def test_per_call_policy_overrides_default(service, recording_sleep):
    operation = AsyncMock(side_effect=rate_limited())

    with pytest.raises(ApiCallError):
        await service.execute_with_retry(operation, policy=RetryPolicy(max_retries=1))

    operation.assert_awaited_once()
    assert recording_sleep.delays == []

def test_default_jitter_stays_below_bound():
    service = ApiRetryService()
    for _ in range(50):
        assert 0.0 <= service._jitter(1.0) < 1.0

@pytest.mark.parametrize("kwargs", [
    {"max_retries": 0},
    {"base_delay_s": -1},
    {"timeout_s": 0},
    {"max_jitter_s": -0.1},
])
def test_retry_policy_validation(kwargs):
    with pytest.raises(ValueError):
        RetryPolicy(**kwargs)
