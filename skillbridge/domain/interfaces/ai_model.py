"""Interface for AI Language Models (LLMs).

Defines the contract for sending a prompt to a generative-AI provider
(e.g., Gemini, Groq) and receiving text back.
"""

import abc

# Import relevant domain models
from ..models.ai import StructuredAIResponse
from ..models.common import PromptText


class AIModel(abc.ABC):
    """Abstract Base Class for AI language model interactions."""

    provider_name: str = "unknown"

    @abc.abstractmethod
    async def generate_text(self, prompt: PromptText) -> StructuredAIResponse:
        """Sends a single prompt to the model asynchronously.

        Args:
            prompt: The full prompt text.

        Returns:
            A StructuredAIResponse containing the model's reply and metadata.

        Raises:
            ConfigurationError: If the provider is not configured (missing API key).
            ApiCallError: If the call fails; `kind` tells transient from permanent.
        """
        pass
