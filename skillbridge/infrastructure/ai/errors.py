"""Adapter from provider SDK exceptions to the tagged ApiCallError.

This is the only place that looks at raw provider errors. Everything
downstream decides on retries and fallbacks from `ApiCallError.kind`.
"""

import asyncio
from typing import Optional

import groq
import openai

from skillbridge.domain.errors import ApiCallError, ApiErrorKind

_RATE_LIMIT_ERRORS = (openai.RateLimitError, groq.RateLimitError)
_TIMEOUT_ERRORS = (openai.APITimeoutError, groq.APITimeoutError, asyncio.TimeoutError)
_CONNECTION_ERRORS = (openai.APIConnectionError, groq.APIConnectionError)
_STATUS_ERRORS = (openai.APIStatusError, groq.APIStatusError)

# Markers some endpoints put in quota errors that arrive without a 429 status
_RATE_LIMIT_MARKERS = ("quota", "429", "resource_exhausted", "rate limit")


def _kind_for_status(status_code: int) -> ApiErrorKind:
    if status_code == 429:
        return ApiErrorKind.RATE_LIMITED
    if status_code in (401, 403):
        return ApiErrorKind.AUTHENTICATION
    if status_code in (408, 504):
        return ApiErrorKind.TIMEOUT
    if status_code >= 500:
        return ApiErrorKind.SERVER
    return ApiErrorKind.INVALID_REQUEST


def _mentions_rate_limit(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in _RATE_LIMIT_MARKERS)


def translate_provider_error(exc: BaseException, provider: Optional[str] = None) -> ApiCallError:
    """Classifies a provider exception.

    Args:
        exc: The exception raised by the SDK (or the transport below it).
        provider: Provider name recorded on the resulting error.

    Returns:
        An ApiCallError; `exc` itself if it already is one.
    """
    if isinstance(exc, ApiCallError):
        return exc

    message = str(exc) or type(exc).__name__
    status_code = getattr(exc, "status_code", None)

    if isinstance(exc, _RATE_LIMIT_ERRORS):
        kind = ApiErrorKind.RATE_LIMITED
    elif isinstance(exc, _TIMEOUT_ERRORS):
        kind = ApiErrorKind.TIMEOUT
    elif isinstance(exc, _CONNECTION_ERRORS):
        kind = ApiErrorKind.TRANSPORT
    elif isinstance(exc, _STATUS_ERRORS) and isinstance(status_code, int):
        kind = _kind_for_status(status_code)
        if kind is ApiErrorKind.INVALID_REQUEST and _mentions_rate_limit(message):
            kind = ApiErrorKind.RATE_LIMITED
    elif _mentions_rate_limit(message):
        kind = ApiErrorKind.RATE_LIMITED
    else:
        kind = ApiErrorKind.UNKNOWN

    error = ApiCallError(kind, message, status_code=status_code, provider=provider)
    error.__cause__ = exc
    return error
