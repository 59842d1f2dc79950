"""Domain models related to AI interactions.

Includes structures for AI responses and generation settings.
"""

from dataclasses import dataclass
from typing import Optional

from .common import TokenUsage

# --- AI Interaction Structures ---

@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters sent with every completion request."""
    temperature: float = 0.7
    top_p: float = 0.9
    top_k: Optional[int] = None # Only sent when configured; not every endpoint accepts it
    max_output_tokens: int = 1024

@dataclass
class StructuredAIResponse:
    """Structured response from an AI model, including metadata."""
    content: str
    token_usage: Optional[TokenUsage] = None
    model_name: Optional[str] = None # Which model generated the response
    latency_ms: Optional[float] = None # Time taken for the API call
