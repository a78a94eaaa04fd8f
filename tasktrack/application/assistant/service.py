"""Assistant service - answers chat messages about task progress."""

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Literal
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.application.assistant.context_builder import (
    ContextSummary,
    build_counselor_summary,
    build_individual_summary,
)
from tasktrack.application.assistant.fallback import FallbackResponder
from tasktrack.application.assistant.generation_client import RetryingGenerationClient
from tasktrack.application.assistant.pacing import PacingGate
from tasktrack.application.assistant.prompt_assembler import PromptAssembler
from tasktrack.application.assistant.response_cache import ResponseCache
from tasktrack.config import Settings, get_settings
from tasktrack.domain.entities import ConversationTurn, UserRole
from tasktrack.domain.protocols.providers import GenerationProvider
from tasktrack.infrastructure.providers.llm import GeminiProvider
from tasktrack.infrastructure.repositories import TaskRepositoryImpl, UserRepositoryImpl
from tasktrack.infrastructure.telemetry import (
    get_logger,
    record_assistant_reply,
    record_fallback,
)

logger = get_logger(__name__)

ReplySource = Literal["cache", "model", "fallback"]


@dataclass(frozen=True)
class AssistantReply:
    text: str
    source: ReplySource


class AssistantRuntime:
    """Process-wide assistant state shared by every request.

    Owns the response cache, the pacing gate and the generation provider.
    The provider is None when no credential is configured.
    """

    def __init__(
        self,
        settings: Settings,
        provider: GenerationProvider | None = None,
        cache: ResponseCache | None = None,
        gate: PacingGate | None = None,
        fallback: FallbackResponder | None = None,
        client: RetryingGenerationClient | None = None,
    ):
        self.settings = settings
        self.provider = provider
        # Explicit None checks: an empty ResponseCache is falsy.
        if cache is None:
            cache = ResponseCache(
                ttl_seconds=settings.assistant_cache_ttl_seconds,
                max_entries=settings.assistant_cache_max_entries,
            )
        if gate is None:
            gate = PacingGate(
                min_interval_seconds=settings.assistant_min_request_interval_ms / 1000,
            )
        self.cache = cache
        self.gate = gate
        self.fallback = fallback if fallback is not None else FallbackResponder(random.Random())
        self.assembler = PromptAssembler(
            history_limit=settings.assistant_history_limit,
            request_history_limit=settings.assistant_request_history_limit,
            temperature=settings.assistant_temperature,
            max_output_tokens=settings.assistant_max_output_tokens,
        )
        self.client = client
        if self.client is None and provider is not None:
            self.client = RetryingGenerationClient(
                provider=provider,
                gate=self.gate,
                cache=self.cache,
                max_attempts=settings.assistant_max_attempts,
                initial_backoff_seconds=settings.assistant_initial_backoff_ms / 1000,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AssistantRuntime":
        provider = GeminiProvider(settings) if settings.generation_configured else None
        return cls(settings, provider=provider)

    @property
    def generation_enabled(self) -> bool:
        return self.client is not None

    async def close(self) -> None:
        if self.provider is not None:
            await self.provider.close()


@lru_cache
def get_assistant_runtime() -> AssistantRuntime:
    """Get the process-wide assistant runtime."""
    return AssistantRuntime.from_settings(get_settings())


class AssistantService:
    """Builds context from the task store and produces a reply.

    Generation failures never surface to the caller; every failure path ends
    in the local fallback responder.
    """

    def __init__(
        self,
        db: AsyncSession,
        runtime: AssistantRuntime,
        clock: Callable[[], datetime] | None = None,
    ):
        self.db = db
        self.runtime = runtime
        self.settings = runtime.settings
        self.user_repo = UserRepositoryImpl(db)
        self.task_repo = TaskRepositoryImpl(db)
        self._tz = ZoneInfo(self.settings.assistant_timezone)
        self._clock = clock or (lambda: datetime.now(self._tz))

    async def build_summary(self, user_id: UUID, role: UserRole) -> ContextSummary:
        now = self._clock()

        if role == "counselor":
            individuals = await self.user_repo.list_individuals(user_id)
            tasks_by_user = await self.task_repo.list_recent_for_users(
                [u.id for u in individuals],
                limit_per_user=self.settings.counselor_task_window,
            )
            roster = [(u, tasks_by_user.get(u.id, [])) for u in individuals]
            return build_counselor_summary(roster, now)

        tasks = await self.task_repo.list_recent(
            user_id, limit=self.settings.individual_task_window
        )
        return build_individual_summary(tasks, now)

    async def reply(
        self,
        user_id: UUID,
        role: UserRole,
        message: str,
        history: Sequence[ConversationTurn] = (),
    ) -> AssistantReply:
        """Answer one chat message.

        Args:
            user_id: Caller's user ID
            role: Role context the summary is built for
            message: The user's message
            history: Prior turns, oldest first

        Returns:
            Reply text and where it came from
        """
        summary = await self.build_summary(user_id, role)
        prompt = self.runtime.assembler.assemble(summary, message, history)

        if not self.runtime.generation_enabled:
            logger.warning(
                "Generation credential not configured, using local fallback",
                extra={"role": role},
            )
            record_fallback("not_configured")
            return self._fallback(message, summary, role)

        cache_key = ResponseCache.key(role, message)
        cached = self.runtime.cache.get(cache_key)
        if cached is not None:
            logger.info("Returning cached assistant reply", extra={"role": role})
            record_assistant_reply(role, "cache")
            return AssistantReply(text=cached, source="cache")

        text = await self.runtime.client.generate(prompt.request, cache_key)
        if text is None:
            return self._fallback(message, summary, role)

        record_assistant_reply(role, "model")
        return AssistantReply(text=text, source="model")

    def _fallback(self, message: str, summary: ContextSummary, role: UserRole) -> AssistantReply:
        logger.info(
            "Using local fallback reply",
            extra={"role": role, "category": self.runtime.fallback.classify(message, summary)},
        )
        record_assistant_reply(role, "fallback")
        return AssistantReply(text=self.runtime.fallback.respond(message, summary), source="fallback")
