import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock

from skillbridge.core.services.coaching_service import CoachingService
from skillbridge.domain.interfaces.ai_model import AIModel
from skillbridge.domain.interfaces.auth import AuthProvider
from skillbridge.domain.interfaces.user_interface import UserInterface
from skillbridge.domain.models.ai import StructuredAIResponse
from skillbridge.domain.models.common import RetryPolicy
from skillbridge.infrastructure.cache.memory_cache import InMemoryCacheStore
from skillbridge.infrastructure.config import settings
from skillbridge.infrastructure.resilience.api_retry import ApiRetryService


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers the requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def ai_response(content: str) -> StructuredAIResponse:
    return StructuredAIResponse(content=content, model_name="fake-model")


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()

@pytest.fixture
def fake_clock():
    return FakeClock()

@pytest.fixture
def recording_sleep():
    return RecordingSleep()

@pytest.fixture
def cache(fake_clock):
    return InMemoryCacheStore(clock=fake_clock)

@pytest.fixture
def retry_service(recording_sleep):
    """Retry service with no jitter and a sleep that returns immediately."""
    return ApiRetryService(
        policy=RetryPolicy(max_retries=2, base_delay_s=1.0, timeout_s=5.0),
        jitter=lambda bound: 0.0,
        sleep=recording_sleep,
    )

@pytest.fixture
def mock_ai_model(mocker):
    model = mocker.MagicMock(spec=AIModel)
    model.provider_name = "fake"
    model.generate_text = mocker.AsyncMock()
    return model

@pytest.fixture
def events():
    return []

@pytest.fixture
def coaching_service(mock_ai_model, cache, retry_service, events):
    return CoachingService(
        ai_model=mock_ai_model,
        cache=cache,
        retry_service=retry_service,
        event_sink=events.append,
    )

@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)

@pytest.fixture
def mock_auth():
    auth = MagicMock(spec=AuthProvider)
    auth.is_authenticated.return_value = True
    return auth

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps real keys and test overrides from leaking between tests."""
    for name in ("GEMINI_API_KEY", "GROQ_API_KEY", "AI_PROVIDER", "SKILLBRIDGE_SESSION_TOKEN", "AUTH_REQUIRED"):
        monkeypatch.delenv(name, raising=False)
    settings.clear_test_config()
    yield
    settings.clear_test_config()
