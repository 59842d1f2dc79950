"""Coaching Service: the five AI-backed coaching operations.

Each operation builds a prompt, asks the AI model through the retry
service, parses the JSON out of the reply and caches it under its own
prefix and TTL. When the model cannot answer, static demo data is served
instead and tagged so the UI can say so. Demo data is never cached.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from skillbridge.core.services import fallback_data, prompts
from skillbridge.domain.errors import ApiCallError, ParseError
from skillbridge.domain.events.api_events import DomainEvent, FallbackDataServed
from skillbridge.domain.interfaces.ai_model import AIModel
from skillbridge.domain.interfaces.cache import CacheStore
from skillbridge.domain.models.coaching import CoachingResult, ResultSource
from skillbridge.domain.models.common import CacheKeys, CacheTTL, PromptText
from skillbridge.infrastructure.ai.response_parser import parse_json_payload
from skillbridge.infrastructure.cache.cached_fetch import CachedFetcher, prefixed_key_builder
from skillbridge.infrastructure.resilience.api_retry import ApiRetryService

logger = logging.getLogger(__name__)

DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")

SKILLS_GAP_FIELDS = ("gapAnalysis", "recommendations", "careerPath")
INTERVIEW_QUESTION_FIELDS = ("questions",)
ANSWER_EVALUATION_FIELDS = ("score", "evaluation")
RESUME_FIELDS = ("analysis", "score")
CAREER_PATH_FIELDS = ("paths",)

FALLBACK_NOTE = "The AI service could not complete this request; showing sample data."


def normalize_skills(skills: Iterable[str]) -> List[str]:
    """Strips, drops blanks and duplicates, and sorts so order never changes the cache key."""
    return sorted({skill.strip() for skill in skills if skill and skill.strip()})


def _log_event(event: DomainEvent) -> None:
    logger.debug(f"EVENT: {event}")


class CoachingService:
    """Runs the coaching operations with caching, retries and demo fallback."""

    def __init__(
        self,
        ai_model: AIModel,
        cache: CacheStore,
        retry_service: ApiRetryService,
        event_sink: Optional[Callable[[DomainEvent], None]] = None,
    ):
        self.ai_model = ai_model
        self.cache = cache
        self.retry_service = retry_service
        self._dispatch_event = event_sink or _log_event

        self._skills_gap = self._fetcher(CacheKeys.SKILLS_ANALYSIS, CacheTTL.MEDIUM, self._fetch_skills_gap)
        self._interview_questions = self._fetcher(
            CacheKeys.INTERVIEW_QUESTIONS, CacheTTL.LONG, self._fetch_interview_questions
        )
        self._answer_evaluation = self._fetcher(
            CacheKeys.ANSWER_EVALUATION, CacheTTL.SHORT, self._fetch_answer_evaluation
        )
        self._resume = self._fetcher(CacheKeys.RESUME_OPTIMIZATION, CacheTTL.MEDIUM, self._fetch_resume)
        self._career_paths = self._fetcher(CacheKeys.CAREER_PATH, CacheTTL.HOUR, self._fetch_career_paths)

    def _fetcher(self, prefix: str, ttl: float, fetch_fn: Callable[..., Any]) -> CachedFetcher[Dict[str, Any]]:
        return CachedFetcher(
            cache=self.cache,
            fetch_fn=fetch_fn,
            key_builder=prefixed_key_builder(self.cache, prefix),
            ttl=ttl,
            name=prefix,
        )

    # --- Model access ---

    async def _generate_json(self, prompt: PromptText, required_fields: Tuple[str, ...], endpoint: str) -> Dict[str, Any]:
        """Asks the model (with retries) and parses its JSON.

        Parsing happens after the retry loop: a malformed reply is not retried.
        """
        response = await self.retry_service.execute_with_retry(
            lambda: self.ai_model.generate_text(prompt), endpoint_name=endpoint
        )
        parsed = parse_json_payload(response.content, required_fields)
        if not parsed.ok:
            raise parsed.error
        logger.debug(f"Parsed {endpoint} payload with keys: {sorted(parsed.payload)}")
        return parsed.payload

    async def _fetch_skills_gap(self, current_skills, target_role, experience, industry) -> Dict[str, Any]:
        prompt = prompts.skills_gap(current_skills, target_role, experience, industry)
        return await self._generate_json(prompt, SKILLS_GAP_FIELDS, CacheKeys.SKILLS_ANALYSIS)

    async def _fetch_interview_questions(self, role, experience, industry, difficulty) -> Dict[str, Any]:
        prompt = prompts.interview_questions(role, experience, industry, difficulty)
        return await self._generate_json(prompt, INTERVIEW_QUESTION_FIELDS, CacheKeys.INTERVIEW_QUESTIONS)

    async def _fetch_answer_evaluation(self, question, answer, role) -> Dict[str, Any]:
        prompt = prompts.answer_evaluation(question, answer, role)
        return await self._generate_json(prompt, ANSWER_EVALUATION_FIELDS, CacheKeys.ANSWER_EVALUATION)

    async def _fetch_resume(self, resume_text, target_role, job_description) -> Dict[str, Any]:
        prompt = prompts.resume_optimization(resume_text, target_role, job_description)
        return await self._generate_json(prompt, RESUME_FIELDS, CacheKeys.RESUME_OPTIMIZATION)

    async def _fetch_career_paths(self, current_role, skills, interests, timeframe) -> Dict[str, Any]:
        prompt = prompts.career_paths(current_role, skills, interests, timeframe)
        return await self._generate_json(prompt, CAREER_PATH_FIELDS, CacheKeys.CAREER_PATH)

    # --- Shared flow ---

    async def _run(
        self,
        fetcher: CachedFetcher[Dict[str, Any]],
        params: Dict[str, Any],
        force_refresh: bool,
        fallback: Callable[[ResultSource], Dict[str, Any]],
        demo_note: str = fallback_data.DEMO_NOTE,
    ) -> CoachingResult:
        try:
            if force_refresh:
                fetched = await fetcher.refetch(**params)
            else:
                fetched = await fetcher.fetch(**params)
        except ApiCallError as e:
            if e.is_rate_limited:
                logger.warning(f"{fetcher.name}: AI quota exhausted, serving demo data")
                return self._serve_fallback(fetcher.name, fallback, ResultSource.DEMO, demo_note, str(e))
            logger.error(f"{fetcher.name}: AI call failed, serving fallback data: {e}")
            return self._serve_fallback(fetcher.name, fallback, ResultSource.FALLBACK, FALLBACK_NOTE, str(e))
        except ParseError as e:
            logger.error(f"{fetcher.name}: unusable AI response ({e.reason}), serving fallback data")
            return self._serve_fallback(fetcher.name, fallback, ResultSource.FALLBACK, FALLBACK_NOTE, e.reason)

        source = ResultSource.CACHE if fetched.from_cache else ResultSource.AI
        return CoachingResult(payload=fetched.value, source=source)

    def _serve_fallback(
        self,
        endpoint: str,
        fallback: Callable[[ResultSource], Dict[str, Any]],
        source: ResultSource,
        note: str,
        reason: str,
    ) -> CoachingResult:
        self._dispatch_event(FallbackDataServed(endpoint=endpoint, reason=reason))
        return CoachingResult(payload=fallback(source), source=source, note=note)

    # --- Operations ---

    async def analyze_skills_gap(
        self,
        current_skills: Iterable[str],
        target_role: str,
        experience: str,
        industry: str,
        force_refresh: bool = False,
    ) -> CoachingResult:
        """Compares the user's skills with a target role and suggests a learning path."""
        skills = normalize_skills(current_skills)
        logger.info(f"Analyzing skills gap for {target_role} ({experience}, {industry})")
        return await self._run(
            self._skills_gap,
            dict(current_skills=skills, target_role=target_role, experience=experience, industry=industry),
            force_refresh,
            lambda source: fallback_data.skills_gap_analysis(
                skills,
                target_role,
                experience,
                industry,
                strong_skill_limit=fallback_data.DEMO_STRONG_SKILL_LIMIT if source is ResultSource.DEMO else None,
            ),
        )

    async def generate_interview_questions(
        self,
        role: str,
        experience: str,
        industry: str,
        difficulty: str = "intermediate",
        force_refresh: bool = False,
    ) -> CoachingResult:
        """Generates mock interview questions.

        Raises:
            ValueError: If `difficulty` is not beginner, intermediate or advanced.
        """
        if difficulty not in DIFFICULTY_LEVELS:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTY_LEVELS)}, got '{difficulty}'")
        logger.info(f"Generating {difficulty} interview questions for {role}")
        return await self._run(
            self._interview_questions,
            dict(role=role, experience=experience, industry=industry, difficulty=difficulty),
            force_refresh,
            lambda source: fallback_data.interview_questions(role),
            demo_note=fallback_data.SAMPLE_QUESTIONS_NOTE,
        )

    async def evaluate_interview_answer(
        self,
        question: str,
        answer: str,
        role: str,
        force_refresh: bool = False,
    ) -> CoachingResult:
        logger.info(f"Evaluating interview answer for {role}")
        return await self._run(
            self._answer_evaluation,
            dict(question=question, answer=answer, role=role),
            force_refresh,
            lambda source: fallback_data.answer_evaluation(role),
        )

    async def optimize_resume(
        self,
        resume_text: str,
        target_role: str,
        job_description: Optional[str] = None,
        force_refresh: bool = False,
    ) -> CoachingResult:
        logger.info(f"Optimizing resume for {target_role}")
        return await self._run(
            self._resume,
            dict(resume_text=resume_text, target_role=target_role, job_description=job_description),
            force_refresh,
            lambda source: fallback_data.resume_optimization(target_role),
        )

    async def get_career_path_recommendations(
        self,
        current_role: str,
        skills: Iterable[str],
        interests: Iterable[str],
        timeframe: str,
        force_refresh: bool = False,
    ) -> CoachingResult:
        """Suggests career paths reachable from the current role within the timeframe."""
        normalized_skills = normalize_skills(skills)
        normalized_interests = normalize_skills(interests)
        logger.info(f"Recommending career paths for {current_role} over {timeframe}")
        return await self._run(
            self._career_paths,
            dict(
                current_role=current_role,
                skills=normalized_skills,
                interests=normalized_interests,
                timeframe=timeframe,
            ),
            force_refresh,
            lambda source: fallback_data.career_path_recommendations(current_role, normalized_skills, timeframe),
        )
