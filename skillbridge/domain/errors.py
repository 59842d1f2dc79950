"""Exception types shared across layers.

Transport failures are reported as a single tagged `ApiCallError` so the
resilience layer can decide on retries from the `kind` alone.
"""

import enum
from typing import Optional


class SkillBridgeError(Exception):
    """Base class for application errors."""


class ConfigurationError(SkillBridgeError):
    """Raised when required configuration (e.g. an API key) is missing."""


class ApiErrorKind(str, enum.Enum):
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    AUTHENTICATION = "authentication"
    INVALID_REQUEST = "invalid_request"
    SERVER = "server"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


RETRYABLE_KINDS = frozenset({ApiErrorKind.RATE_LIMITED, ApiErrorKind.TIMEOUT})


class ApiCallError(SkillBridgeError):
    """A failed call to an external AI endpoint."""

    def __init__(
        self,
        kind: ApiErrorKind,
        reason: str,
        status_code: Optional[int] = None,
        provider: Optional[str] = None,
    ):
        self.kind = kind
        self.reason = reason
        self.status_code = status_code
        self.provider = provider
        super().__init__(f"[{kind.value}] {reason}")

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS

    @property
    def is_rate_limited(self) -> bool:
        return self.kind is ApiErrorKind.RATE_LIMITED


class ParseError(SkillBridgeError):
    """Model output did not contain a usable JSON payload."""

    def __init__(self, reason: str, raw_excerpt: str = ""):
        self.reason = reason
        self.raw_excerpt = raw_excerpt
        super().__init__(reason)
