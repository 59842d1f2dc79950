"""Concrete implementation of the AIModel interface using the Groq API.

Hides the specifics of the Groq client library behind the shared
chat-completions client.
"""

import logging
from typing import Any

from groq import AsyncGroq

from skillbridge.infrastructure.ai.base_client import ChatCompletionsClient

logger = logging.getLogger(__name__)

class GroqClient(ChatCompletionsClient):
    """Groq implementation of the AIModel interface."""

    provider_name = "groq"
    DEFAULT_MODEL = "llama-3.3-70b-versatile"
    API_KEY_NAME = "GROQ_API_KEY"

    def _create_sdk_client(self, api_key: str) -> Any:
        return AsyncGroq(api_key=api_key, max_retries=0)
