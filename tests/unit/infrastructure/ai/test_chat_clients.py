import httpx
import openai
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from skillbridge.domain.errors import ApiCallError, ApiErrorKind, ConfigurationError
from skillbridge.domain.models.ai import GenerationConfig
from skillbridge.infrastructure.ai.gemini.gemini_client import DEFAULT_GEMINI_BASE_URL, GeminiClient
from skillbridge.infrastructure.ai.groq.groq_client import GroqClient


def completion(content, usage=True):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5, total_tokens=15) if usage else None,
        model="gemini-2.5-flash",
    )

@pytest.fixture
def sdk_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion('{"ok": true}'))
    return client

@pytest.fixture
def gemini(mocker, sdk_client):
    mocker.patch("skillbridge.infrastructure.ai.gemini.gemini_client.AsyncOpenAI", return_value=sdk_client)
    return GeminiClient(api_key="test-key")


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error():
    client = GeminiClient(api_key=None)
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        await client.generate_text("hello")

@pytest.mark.asyncio
async def test_groq_missing_api_key_names_groq_variable():
    with pytest.raises(ConfigurationError, match="GROQ_API_KEY"):
        await GroqClient().generate_text("hello")

@pytest.mark.asyncio
async def test_generate_text_sends_prompt_and_generation_config(gemini, sdk_client):
    response = await gemini.generate_text("Analyze my skills")

    assert response.content == '{"ok": true}'
    assert response.token_usage == {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}
    assert response.latency_ms is not None
    sdk_client.chat.completions.create.assert_awaited_once_with(
        messages=[{"role": "user", "content": "Analyze my skills"}],
        model="gemini-2.5-flash",
        temperature=0.7,
        top_p=0.9,
        max_tokens=1024,
    )

def test_sdk_client_is_built_lazily_against_gemini_endpoint(mocker):
    factory = mocker.patch("skillbridge.infrastructure.ai.gemini.gemini_client.AsyncOpenAI")
    client = GeminiClient(api_key="test-key")
    factory.assert_not_called()

    client._get_client()
    client._get_client()

    factory.assert_called_once_with(api_key="test-key", base_url=DEFAULT_GEMINI_BASE_URL, max_retries=0)

def test_top_k_sent_only_when_configured():
    client = GeminiClient(api_key="k", generation_config=GenerationConfig(top_k=40))
    assert client._request_kwargs()["extra_body"] == {"top_k": 40}
    assert "extra_body" not in GeminiClient(api_key="k")._request_kwargs()

@pytest.mark.asyncio
async def test_provider_errors_are_translated(gemini, sdk_client):
    request = httpx.Request("POST", DEFAULT_GEMINI_BASE_URL)
    sdk_client.chat.completions.create.side_effect = openai.RateLimitError(
        "quota", response=httpx.Response(429, request=request), body=None
    )

    with pytest.raises(ApiCallError) as exc_info:
        await gemini.generate_text("hi")

    assert exc_info.value.kind is ApiErrorKind.RATE_LIMITED
    assert exc_info.value.provider == "gemini"

@pytest.mark.asyncio
async def test_malformed_response_structure(gemini, sdk_client):
    sdk_client.chat.completions.create.return_value = SimpleNamespace(choices=[], usage=None)

    with pytest.raises(ApiCallError) as exc_info:
        await gemini.generate_text("hi")

    assert exc_info.value.kind is ApiErrorKind.INVALID_REQUEST

@pytest.mark.asyncio
async def test_groq_client_uses_groq_sdk(mocker, sdk_client):
    factory = mocker.patch("skillbridge.infrastructure.ai.groq.groq_client.AsyncGroq", return_value=sdk_client)
    client = GroqClient(api_key="groq-key", model="llama-3.1-8b-instant")

    await client.generate_text("hi")

    factory.assert_called_once_with(api_key="groq-key", max_retries=0)
    assert sdk_client.chat.completions.create.await_args.kwargs["model"] == "llama-3.1-8b-instant"
