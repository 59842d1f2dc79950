"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), checks the auth
boundary when sign-in is required, delegates to the CoachingService and
renders the results. Also runs the interactive session started when no
command is given.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Tuple

from skillbridge.core.services.coaching_service import CoachingService
from skillbridge.domain.interfaces.auth import AuthProvider
from skillbridge.domain.interfaces.cache import CacheStore
from skillbridge.domain.interfaces.user_interface import UserInterface
from skillbridge.domain.models.coaching import CoachingResult

logger = logging.getLogger(__name__)

Request = Callable[[bool], Awaitable[CoachingResult]]

SESSION_MENU: List[Tuple[str, str]] = [
    ("skills-gap", "Analyze the gap between your skills and a target role"),
    ("interview", "Generate mock interview questions"),
    ("evaluate-answer", "Get feedback on an interview answer"),
    ("optimize-resume", "Optimize a resume for a target role"),
    ("career-paths", "Explore career paths from your current role"),
    ("refresh", "Re-run the last request, bypassing the cache"),
    ("clear-cache", "Drop all cached results"),
    ("quit", "Leave the session"),
]
QUIT_COMMANDS = ("quit", "exit", "q")


def split_list(raw: Optional[str]) -> List[str]:
    """Splits a comma-separated list; blanks are dropped."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class CommandHandler:
    """Handles incoming commands and delegates to the coaching service."""

    def __init__(
        self,
        coaching_service: CoachingService,
        cache: CacheStore,
        auth: AuthProvider,
        ui: UserInterface,
        auth_required: bool = False,
    ):
        """Initializes the CommandHandler with required services."""
        self.coaching_service = coaching_service
        self.cache = cache
        self.auth = auth
        self.ui = ui
        self.auth_required = auth_required
        self._last_request: Optional[Tuple[str, Request]] = None

    def _ensure_signed_in(self) -> bool:
        if not self.auth_required or self.auth.is_authenticated():
            return True
        logger.info("Coaching command blocked: user is not signed in")
        self.auth.redirect_to_sign_in()
        return False

    async def _execute(self, title: str, request: Request, force_refresh: bool = False) -> Optional[CoachingResult]:
        """Runs a coaching request and displays its result.

        Returns None when the user must sign in first.
        """
        if not self._ensure_signed_in():
            return None
        result = await request(force_refresh)
        self._last_request = (title, request)
        logger.info(f"{title}: served from {result.source.value}")
        self.ui.display_result(result, title=title)
        return result

    # --- Commands ---

    async def handle_skills_gap(
        self, skills: List[str], target_role: str, experience: str, industry: str, force_refresh: bool = False
    ) -> Optional[CoachingResult]:
        return await self._execute(
            f"Skills Gap: {target_role}",
            lambda refresh: self.coaching_service.analyze_skills_gap(
                skills, target_role, experience, industry, force_refresh=refresh
            ),
            force_refresh,
        )

    async def handle_interview(
        self, role: str, experience: str, industry: str, difficulty: str, force_refresh: bool = False
    ) -> Optional[CoachingResult]:
        return await self._execute(
            f"Interview Questions: {role}",
            lambda refresh: self.coaching_service.generate_interview_questions(
                role, experience, industry, difficulty, force_refresh=refresh
            ),
            force_refresh,
        )

    async def handle_evaluate_answer(
        self, question: str, answer: str, role: str, force_refresh: bool = False
    ) -> Optional[CoachingResult]:
        return await self._execute(
            "Answer Evaluation",
            lambda refresh: self.coaching_service.evaluate_interview_answer(
                question, answer, role, force_refresh=refresh
            ),
            force_refresh,
        )

    async def handle_optimize_resume(
        self, resume_text: str, target_role: str, job_description: Optional[str] = None, force_refresh: bool = False
    ) -> Optional[CoachingResult]:
        return await self._execute(
            f"Resume Optimization: {target_role}",
            lambda refresh: self.coaching_service.optimize_resume(
                resume_text, target_role, job_description, force_refresh=refresh
            ),
            force_refresh,
        )

    async def handle_career_paths(
        self, current_role: str, skills: List[str], interests: List[str], timeframe: str, force_refresh: bool = False
    ) -> Optional[CoachingResult]:
        return await self._execute(
            f"Career Paths: {current_role}",
            lambda refresh: self.coaching_service.get_career_path_recommendations(
                current_role, skills, interests, timeframe, force_refresh=refresh
            ),
            force_refresh,
        )

    async def handle_refresh(self) -> Optional[CoachingResult]:
        """Re-runs the last request of this session with force_refresh."""
        if self._last_request is None:
            self.ui.display_info("Nothing to refresh yet.")
            return None
        title, request = self._last_request
        return await self._execute(title, request, force_refresh=True)

    def handle_clear_cache(self) -> None:
        """Handles the 'clear-cache' command."""
        logger.info("Handling 'clear-cache' command")
        self.cache.clear()
        self.ui.display_info("Cache cleared successfully.")

    # --- Interactive session ---

    def _ask(self, label: str, default: Optional[str] = None) -> str:
        suffix = f" [{default}]" if default else ""
        value = str(self.ui.get_prompt(f"{label}{suffix}: ")).strip()
        return value or (default or "")

    async def _dispatch_session_command(self, command: str) -> None:
        if command == "skills-gap":
            await self.handle_skills_gap(
                split_list(self._ask("Your skills (comma-separated)")),
                self._ask("Target role"),
                self._ask("Experience level", "Mid Level"),
                self._ask("Industry", "Technology"),
            )
        elif command == "interview":
            await self.handle_interview(
                self._ask("Role"),
                self._ask("Experience level", "Mid Level"),
                self._ask("Industry", "Technology"),
                self._ask("Difficulty", "intermediate"),
            )
        elif command == "evaluate-answer":
            await self.handle_evaluate_answer(
                self._ask("Question"),
                self._ask("Your answer"),
                self._ask("Role"),
            )
        elif command == "optimize-resume":
            await self.handle_optimize_resume(
                self._ask("Resume text"),
                self._ask("Target role"),
                self._ask("Job description (optional)") or None,
            )
        elif command == "career-paths":
            await self.handle_career_paths(
                self._ask("Current role"),
                split_list(self._ask("Your skills (comma-separated)")),
                split_list(self._ask("Interests (comma-separated, optional)")),
                self._ask("Timeframe", "2 years"),
            )
        elif command == "refresh":
            await self.handle_refresh()
        elif command == "clear-cache":
            self.handle_clear_cache()
        else:
            self.ui.display_warning(f"Unknown command: {command}")

    async def run_session(self) -> None:
        """Interactive menu loop; repeated requests in one session hit the cache.

        Raises:
            ConfigurationError: Propagated so the entry point can exit.
        """
        logger.info("Starting interactive session.")
        self.ui.display_output("# SkillBridge\nAI career coaching. Pick a command below.", title="Welcome")
        while True:
            try:
                self.ui.display_menu(SESSION_MENU)
                command = str(self.ui.get_prompt("skillbridge> ")).strip().lower()
                if not command:
                    continue
                if command in QUIT_COMMANDS:
                    logger.info("Session ended by user.")
                    break

                removed = self.cache.clear_expired()
                if removed:
                    logger.debug(f"Swept {removed} expired cache entries")
                await self._dispatch_session_command(command)
            except ValueError as e:
                self.ui.display_error(str(e))
            except (KeyboardInterrupt, EOFError):
                logger.info("Session interrupted by user.")
                break
        self.ui.display_info("Goodbye!")
