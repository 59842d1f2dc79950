"""Concrete implementation of the AIModel interface for Google Gemini.

Talks to Gemini through its OpenAI-compatible endpoint with the official
`openai` async client, so request and response handling is shared with the
other chat-completions providers.
"""

import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from skillbridge.domain.models.ai import GenerationConfig
from skillbridge.infrastructure.ai.base_client import ChatCompletionsClient

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

class GeminiClient(ChatCompletionsClient):
    """Gemini implementation of the AIModel interface."""

    provider_name = "gemini"
    DEFAULT_MODEL = "gemini-2.5-flash" # Higher free tier limits than the pro models
    API_KEY_NAME = "GEMINI_API_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        generation_config: Optional[GenerationConfig] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(api_key=api_key, model=model, generation_config=generation_config)
        self.base_url = base_url or DEFAULT_GEMINI_BASE_URL

    def _create_sdk_client(self, api_key: str) -> Any:
        # SDK-level retries are disabled; ApiRetryService owns the retry policy
        return AsyncOpenAI(api_key=api_key, base_url=self.base_url, max_retries=0)
