import json

import pytest
from typer.testing import CliRunner
from unittest.mock import MagicMock
from pathlib import Path

from skillbridge.core.command_handler import CommandHandler
from skillbridge.domain.errors import ApiCallError, ApiErrorKind, ConfigurationError
from skillbridge.domain.models.ai import StructuredAIResponse
from skillbridge.domain.models.coaching import ResultSource
from skillbridge.infrastructure.cli.display import ConsoleDisplay
from skillbridge.main import app

# These fixtures are defined in tests/conftest.py:
# runner: CliRunner
# cache: InMemoryCacheStore on a fake clock
# coaching_service: real CoachingService over mock_ai_model and a no-wait retry service
# mock_ai_model: MagicMock(spec=AIModel) with an AsyncMock generate_text
# mock_auth: MagicMock(spec=AuthProvider), signed in by default

CAREER_PATHS = {"paths": [{"title": "Staff Engineer", "match": 80}], "marketTrends": []}


def reply(payload) -> StructuredAIResponse:
    return StructuredAIResponse(content=json.dumps(payload), model_name="fake-model")

@pytest.fixture
def mock_console_display():
    """Mocks the ConsoleDisplay to capture output easily."""
    return MagicMock(spec=ConsoleDisplay)

@pytest.fixture
def deps(coaching_service, cache, mock_auth, mock_console_display, mock_ai_model):
    """Dependency dict handed to the Typer app through ctx.obj."""
    return {
        'ui': mock_console_display,
        'cache': cache,
        'ai_model': mock_ai_model,
        'auth': mock_auth,
        'coaching_service': coaching_service,
        'command_handler': CommandHandler(
            coaching_service=coaching_service,
            cache=cache,
            auth=mock_auth,
            ui=mock_console_display,
        ),
    }

def displayed_results(mock_console_display: MagicMock):
    return [c.args[0] for c in mock_console_display.display_result.call_args_list]


def test_career_paths_command_then_cache_hit(runner: CliRunner, deps, mock_ai_model, mock_console_display):
    """Two identical invocations make one AI call; the second is served from cache."""
    mock_ai_model.generate_text.return_value = reply(CAREER_PATHS)
    args = ["career-paths", "--role", "Software Engineer", "--skills", "Python, SQL", "--timeframe", "3 years"]

    first = runner.invoke(app, args, obj=deps)
    second = runner.invoke(app, ["career-paths", "--role", "Software Engineer", "--skills", "SQL,Python", "-t", "3 years"], obj=deps)

    assert first.exit_code == 0, f"CLI command failed: {first.stdout}"
    assert second.exit_code == 0, f"CLI command failed: {second.stdout}"
    mock_ai_model.generate_text.assert_awaited_once()
    sources = [r.source for r in displayed_results(mock_console_display)]
    assert sources == [ResultSource.AI, ResultSource.CACHE]
    mock_console_display.display_error.assert_not_called()

def test_refresh_flag_bypasses_cache(runner: CliRunner, deps, mock_ai_model):
    mock_ai_model.generate_text.return_value = reply({"score": 82, "evaluation": {"strengths": []}})
    args = ["evaluate-answer", "-q", "Why this role?", "-a", "I like it.", "-r", "Designer"]

    runner.invoke(app, args, obj=deps)
    result = runner.invoke(app, args + ["--refresh"], obj=deps)

    assert result.exit_code == 0
    assert mock_ai_model.generate_text.await_count == 2

def test_skills_gap_rate_limited_shows_demo(runner: CliRunner, deps, mock_ai_model, mock_console_display):
    mock_ai_model.generate_text.side_effect = ApiCallError(ApiErrorKind.RATE_LIMITED, "quota exceeded", 429)

    result = runner.invoke(
        app,
        ["skills-gap", "-s", "HTML,CSS", "-r", "Frontend Developer", "-e", "Entry Level"],
        obj=deps,
    )

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    shown = displayed_results(mock_console_display)[0]
    assert shown.source is ResultSource.DEMO
    assert "Frontend Developer positions in Technology" in shown.payload["careerPath"]["salaryProjection"]

def test_optimize_resume_reads_file(runner: CliRunner, deps, mock_ai_model, tmp_path: Path):
    resume = tmp_path / "resume.txt"
    resume.write_text("Jane Doe\nSoftware developer with 3 years of Python.", encoding="utf-8")
    mock_ai_model.generate_text.return_value = reply({"analysis": {"atsScore": 70}, "score": {"overall": 70}})

    result = runner.invoke(app, ["optimize-resume", "-f", str(resume), "-r", "Backend Engineer"], obj=deps)

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    prompt = mock_ai_model.generate_text.await_args.args[0]
    assert "Software developer with 3 years of Python." in prompt

def test_invalid_difficulty_exits_with_error(runner: CliRunner, deps, mock_console_display):
    result = runner.invoke(app, ["interview", "-r", "Developer", "-d", "expert"], obj=deps)

    assert result.exit_code == 1
    mock_console_display.display_error.assert_called_once()

def test_missing_api_key_exits_with_error(runner: CliRunner, deps, mock_ai_model, mock_console_display):
    mock_ai_model.generate_text.side_effect = ConfigurationError("gemini API key is not configured.")

    result = runner.invoke(app, ["interview", "-r", "Developer"], obj=deps)

    assert result.exit_code == 1
    mock_console_display.display_error.assert_called_once_with(
        "Configuration error: gemini API key is not configured."
    )
    mock_console_display.display_result.assert_not_called()

def test_sign_in_required(runner: CliRunner, deps, mock_auth, mock_ai_model):
    mock_auth.is_authenticated.return_value = False
    deps['command_handler'].auth_required = True

    result = runner.invoke(app, ["career-paths", "-r", "Developer", "-s", "Python"], obj=deps)

    assert result.exit_code == 0
    mock_auth.redirect_to_sign_in.assert_called_once()
    mock_ai_model.generate_text.assert_not_awaited()

def test_clear_cache_command(runner: CliRunner, deps, cache, mock_console_display):
    cache.set("career-path:x", {"paths": []})

    result = runner.invoke(app, ["clear-cache"], obj=deps)

    assert result.exit_code == 0
    assert cache.size == 0
    mock_console_display.display_info.assert_called_once_with("Cache cleared successfully.")

def test_interactive_session_flow(runner: CliRunner, deps, mock_ai_model, mock_console_display):
    """No command starts the session; a repeated request is served from cache."""
    mock_ai_model.generate_text.return_value = reply(CAREER_PATHS)
    request = ["career-paths", "Developer", "Python", "", "1 year"]
    mock_console_display.get_prompt.side_effect = request + request + ["quit"]

    result = runner.invoke(app, [], obj=deps)

    assert result.exit_code == 0, f"CLI command failed: {result.stdout}"
    mock_ai_model.generate_text.assert_awaited_once()
    sources = [r.source for r in displayed_results(mock_console_display)]
    assert sources == [ResultSource.AI, ResultSource.CACHE]
    mock_console_display.display_info.assert_called_with("Goodbye!")
