"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like cache keys, TTL tiers
and retry settings, ensuring consistency and type safety.
"""

from dataclasses import dataclass
from typing import NewType, Optional, TypedDict

# === Core Value Objects ===

PromptText = NewType("PromptText", str)        # Prompt sent to the AI model
ProcessedOutput = NewType("ProcessedOutput", str) # Text ready for display

# === Caching Context ===
CacheKey = NewType("CacheKey", str)              # Unique key for a cache entry
CachePrefix = NewType("CachePrefix", str)      # Prefix for categorizing cache keys (e.g., 'skills-analysis')


class CacheKeys:
    """Cache key prefixes for the coaching endpoints."""
    SKILLS_ANALYSIS = CachePrefix("skills-analysis")
    INTERVIEW_QUESTIONS = CachePrefix("interview-questions")
    ANSWER_EVALUATION = CachePrefix("answer-evaluation")
    RESUME_OPTIMIZATION = CachePrefix("resume-optimization")
    CAREER_PATH = CachePrefix("career-path")


class CacheTTL:
    """TTL tiers in seconds, picked by how quickly the data goes stale."""
    SHORT = 2 * 60
    MEDIUM = 5 * 60
    LONG = 15 * 60
    HOUR = 60 * 60


# === Token Management ===

class TokenUsage(TypedDict):
    """Represents token usage information from an AI call."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


# === Resilience Context ===

@dataclass(frozen=True)
class RetryPolicy:
    """Value Object representing retry/backoff configuration.

    Attributes:
        max_retries: Total number of attempts, at least 1.
        base_delay_s: Base of the exponential backoff in seconds.
        timeout_s: Per-attempt timeout in seconds, or None to wait forever.
        max_jitter_s: Exclusive upper bound of the random jitter added to each delay.
    """
    max_retries: int = 2
    base_delay_s: float = 1.0
    timeout_s: Optional[float] = 15.0
    max_jitter_s: float = 1.0

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.base_delay_s < 0:
            raise ValueError(f"base_delay_s must be >= 0, got {self.base_delay_s}")
        if self.max_jitter_s < 0:
            raise ValueError(f"max_jitter_s must be >= 0, got {self.max_jitter_s}")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")

    def backoff_delay(self, attempt: int, jitter: float = 0.0) -> float:
        """Delay before the attempt following `attempt` (0-based)."""
        return self.base_delay_s * (2 ** attempt) + jitter
