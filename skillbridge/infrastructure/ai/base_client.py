"""Shared plumbing for chat-completions style AI clients.

Both supported providers speak the OpenAI chat-completions format, so
request building, response parsing and error translation live here.
Subclasses only say how to construct their SDK client.
"""

import abc
import logging
import time
from typing import Any, Dict, Optional

from skillbridge.domain.errors import ApiCallError, ApiErrorKind, ConfigurationError
from skillbridge.domain.interfaces.ai_model import AIModel
from skillbridge.domain.models.ai import GenerationConfig, StructuredAIResponse
from skillbridge.domain.models.common import PromptText, TokenUsage
from skillbridge.infrastructure.ai.errors import translate_provider_error

logger = logging.getLogger(__name__)


class ChatCompletionsClient(AIModel):
    """Base for providers reached through an async chat-completions SDK."""

    DEFAULT_MODEL: str = ""
    API_KEY_NAME: str = "API_KEY"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        generation_config: Optional[GenerationConfig] = None,
    ):
        """Stores settings; the SDK client is created on first use.

        Args:
            api_key: Provider API key. A missing key is only reported when a
                request is attempted.
            model: Model name, defaults to DEFAULT_MODEL.
            generation_config: Sampling parameters for every request.
        """
        self._api_key = api_key
        self._client: Any = None
        self.model = model or self.DEFAULT_MODEL
        self.generation_config = generation_config or GenerationConfig()
        logger.info(f"{self.__class__.__name__} configured for model: {self.model}")

    @abc.abstractmethod
    def _create_sdk_client(self, api_key: str) -> Any:
        """Builds the provider's async SDK client."""

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise ConfigurationError(
                    f"{self.provider_name} API key is not configured. "
                    f"Set {self.API_KEY_NAME} in your environment or .env file."
                )
            self._client = self._create_sdk_client(self._api_key)
        return self._client

    def _request_kwargs(self) -> Dict[str, Any]:
        config = self.generation_config
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "temperature": config.temperature,
            "top_p": config.top_p,
            "max_tokens": config.max_output_tokens,
        }
        if config.top_k is not None:
            kwargs["extra_body"] = {"top_k": config.top_k}
        return kwargs

    def _parse_response(self, response: Any) -> StructuredAIResponse:
        """Parses a chat-completions response object."""
        try:
            content = response.choices[0].message.content or ""
            token_usage = None
            if response.usage:
                token_usage = TokenUsage(
                    prompt_tokens=response.usage.prompt_tokens,
                    completion_tokens=response.usage.completion_tokens,
                    total_tokens=response.usage.total_tokens,
                )
            return StructuredAIResponse(
                content=content,
                token_usage=token_usage,
                model_name=getattr(response, "model", None) or self.model,
            )
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            logger.error(f"Failed to parse {self.provider_name} response structure: {e}", exc_info=True)
            raise ApiCallError(
                ApiErrorKind.INVALID_REQUEST,
                f"Invalid response structure from {self.provider_name}: {e}",
                provider=self.provider_name,
            ) from e

    async def generate_text(self, prompt: PromptText) -> StructuredAIResponse:
        client = self._get_client()
        logger.debug(f"Sending prompt ({len(prompt)} chars) to {self.provider_name} model: {self.model}")
        start_time = time.perf_counter()
        try:
            completion = await client.chat.completions.create(
                messages=[{"role": "user", "content": prompt}],
                **self._request_kwargs(),
            )
        except Exception as e:
            error = translate_provider_error(e, provider=self.provider_name)
            logger.warning(f"{self.provider_name} call failed ({error.kind.value}): {error.reason}")
            raise error from e

        structured_response = self._parse_response(completion)
        structured_response.latency_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Received response from {self.provider_name} in {structured_response.latency_ms:.2f}ms. "
            f"Usage: {structured_response.token_usage}"
        )
        return structured_response
