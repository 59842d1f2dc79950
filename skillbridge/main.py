"""Main entry point for the SkillBridge CLI.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Coroutine, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from skillbridge.core.command_handler import CommandHandler, split_list
from skillbridge.core.services.coaching_service import CoachingService

# --- Domain Layer ---
from skillbridge.domain.errors import ConfigurationError
from skillbridge.domain.interfaces.ai_model import AIModel

# --- Infrastructure Layer ---
from skillbridge.infrastructure.ai.gemini.gemini_client import GeminiClient
from skillbridge.infrastructure.ai.groq.groq_client import GroqClient
from skillbridge.infrastructure.auth.session_auth import SessionTokenAuth
from skillbridge.infrastructure.cache.memory_cache import InMemoryCacheStore
from skillbridge.infrastructure.cli.display import ConsoleDisplay
from skillbridge.infrastructure.config.settings import (
    get_ai_provider,
    get_api_key,
    get_auth_settings,
    get_base_url,
    get_cache_max_items,
    get_config,
    get_generation_config,
    get_model_name,
    get_retry_policy,
    load_configuration,
)
from skillbridge.infrastructure.monitoring.logger_setup import (
    DEFAULT_LOG_FORMAT,
    resolve_log_level,
    setup_logging,
)
from skillbridge.infrastructure.resilience.api_retry import ApiRetryService

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_ai_model(provider: str) -> AIModel:
    """Builds the client for the configured provider. Keys are checked on first use."""
    if provider == "groq":
        return GroqClient(
            api_key=get_api_key("groq"),
            model=get_model_name("groq"),
            generation_config=get_generation_config(),
        )
    return GeminiClient(
        api_key=get_api_key("gemini"),
        model=get_model_name("gemini"),
        generation_config=get_generation_config(),
        base_url=get_base_url("gemini"),
    )

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {}
    try:
        # 1. Load Configuration First
        load_configuration()
        setup_logging(
            log_level=resolve_log_level(get_config('logging.level')),
            log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
            log_file=get_config('logging.file'),
        )
        logger.info("Configuration and logging initialized.")

        # 2. Infrastructure Adapters & Services
        dependencies['ui'] = ConsoleDisplay()
        dependencies['cache'] = InMemoryCacheStore(max_items=get_cache_max_items())
        dependencies['api_retry_service'] = ApiRetryService(policy=get_retry_policy())

        provider = get_ai_provider()
        dependencies['ai_model'] = create_ai_model(provider)
        logger.info(f"AI provider selected: {provider}")

        auth_settings = get_auth_settings()
        dependencies['auth'] = SessionTokenAuth(
            session_token=auth_settings['session_token'],
            sign_in_url=auth_settings['sign_in_url'],
            ui=dependencies['ui'],
        )

        # 3. Core Services
        dependencies['coaching_service'] = CoachingService(
            ai_model=dependencies['ai_model'],
            cache=dependencies['cache'],
            retry_service=dependencies['api_retry_service'],
        )

        # 4. Command Handler
        dependencies['command_handler'] = CommandHandler(
            coaching_service=dependencies['coaching_service'],
            cache=dependencies['cache'],
            auth=dependencies['auth'],
            ui=dependencies['ui'],
            auth_required=auth_settings['required'],
        )

        logger.info("All dependencies initialized successfully.")
        return dependencies

    except Exception as e:
        logger.error(f"Fatal Error during application initialization: {e}", exc_info=True)
        if dependencies.get('ui'):
            dependencies['ui'].display_error(f"Application Initialization Failed: {e}")
        else:
            print(f"FATAL ERROR during initialization: {e}", file=sys.stderr)
        sys.exit(1)

# --- Typer App Definition ---
app = typer.Typer(
    name="skillbridge",
    help="SkillBridge: AI career coaching (skills gap, interview prep, resume and career paths).",
    add_completion=False,
)

# --- Helper for Running Async Commands ---
def run_async(ctx: typer.Context, coro: Coroutine[Any, Any, Any]) -> None:
    """Runs a handler coroutine and turns failures into an error panel and exit code 1."""
    ui = ctx.obj['ui']
    try:
        asyncio.run(coro)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}", exc_info=True)
        ui.display_error(f"Configuration error: {e}")
        raise typer.Exit(code=1)
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        ui.display_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error(f"Error executing command: {e}", exc_info=True)
        ui.display_error(f"Command execution failed: {e}")
        raise typer.Exit(code=1)

def _handler(ctx: typer.Context) -> CommandHandler:
    return ctx.obj['command_handler']

# --- CLI Commands ---

RoleOption = Annotated[str, typer.Option("--role", "-r", help="Target or current role, e.g. 'Frontend Developer'.")]
ExperienceOption = Annotated[str, typer.Option("--experience", "-e", help="Experience level, e.g. 'Entry Level', 'Mid Level'.")]
IndustryOption = Annotated[str, typer.Option("--industry", help="Industry, e.g. 'Technology'.")]
SkillsOption = Annotated[str, typer.Option("--skills", "-s", help="Comma-separated list of your skills.")]
RefreshOption = Annotated[bool, typer.Option("--refresh", help="Bypass the cache and ask the AI again.")]

@app.command(name="skills-gap")
def skills_gap_command(
    ctx: typer.Context,
    skills: SkillsOption,
    role: RoleOption,
    experience: ExperienceOption = "Mid Level",
    industry: IndustryOption = "Technology",
    refresh: RefreshOption = False,
):
    """Analyze the gap between your skills and a target role."""
    run_async(ctx, _handler(ctx).handle_skills_gap(split_list(skills), role, experience, industry, refresh))

@app.command()
def interview(
    ctx: typer.Context,
    role: RoleOption,
    experience: ExperienceOption = "Mid Level",
    industry: IndustryOption = "Technology",
    difficulty: Annotated[str, typer.Option("--difficulty", "-d", help="beginner, intermediate or advanced.")] = "intermediate",
    refresh: RefreshOption = False,
):
    """Generate mock interview questions for a role."""
    run_async(ctx, _handler(ctx).handle_interview(role, experience, industry, difficulty, refresh))

@app.command(name="evaluate-answer")
def evaluate_answer_command(
    ctx: typer.Context,
    question: Annotated[str, typer.Option("--question", "-q", help="The interview question.")],
    answer: Annotated[str, typer.Option("--answer", "-a", help="Your answer.")],
    role: RoleOption,
    refresh: RefreshOption = False,
):
    """Get feedback and a score for an interview answer."""
    run_async(ctx, _handler(ctx).handle_evaluate_answer(question, answer, role, refresh))

@app.command(name="optimize-resume")
def optimize_resume_command(
    ctx: typer.Context,
    resume: Annotated[Path, typer.Option("--resume", "-f",
                                         exists=True, file_okay=True, dir_okay=False,
                                         readable=True, resolve_path=True,
                                         help="Path to a plain-text resume.")],
    role: RoleOption,
    job_description: Annotated[Optional[str], typer.Option("--job-description", "-j", help="Job description to tailor to.")] = None,
    refresh: RefreshOption = False,
):
    """Optimize a resume for a target role (and optionally a job description)."""
    resume_text = resume.read_text(encoding='utf-8')
    run_async(ctx, _handler(ctx).handle_optimize_resume(resume_text, role, job_description, refresh))

@app.command(name="career-paths")
def career_paths_command(
    ctx: typer.Context,
    role: RoleOption,
    skills: SkillsOption,
    interests: Annotated[str, typer.Option("--interests", help="Comma-separated list of interests.")] = "",
    timeframe: Annotated[str, typer.Option("--timeframe", "-t", help="Planning horizon, e.g. '2 years'.")] = "2 years",
    refresh: RefreshOption = False,
):
    """Explore career paths reachable from your current role."""
    run_async(ctx, _handler(ctx).handle_career_paths(role, split_list(skills), split_list(interests), timeframe, refresh))

@app.command(name="clear-cache")
def clear_cache_command(ctx: typer.Context):
    """Clears the in-memory result cache."""
    _handler(ctx).handle_clear_cache()

@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    """Main entry point. Starts an interactive session if no command is given."""
    if ctx.obj is None:
        ctx.obj = create_dependencies()

    if ctx.invoked_subcommand is None:
        logger.info("No command invoked, starting interactive session.")
        run_async(ctx, _handler(ctx).run_session())

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
