"""Task-aware chat assistant pipeline."""

from tasktrack.application.assistant.context_builder import (
    ContextSummary,
    CounselorSummary,
    IndividualDigest,
    IndividualSummary,
    build_counselor_summary,
    build_individual_summary,
    calculate_streak,
    completion_rate,
)
from tasktrack.application.assistant.fallback import FallbackResponder
from tasktrack.application.assistant.generation_client import RetryingGenerationClient
from tasktrack.application.assistant.pacing import PacingGate
from tasktrack.application.assistant.prompt_assembler import AssembledPrompt, PromptAssembler
from tasktrack.application.assistant.response_cache import ResponseCache
from tasktrack.application.assistant.service import (
    AssistantReply,
    AssistantRuntime,
    AssistantService,
    get_assistant_runtime,
)

__all__ = [
    "AssembledPrompt",
    "AssistantReply",
    "AssistantRuntime",
    "AssistantService",
    "ContextSummary",
    "CounselorSummary",
    "FallbackResponder",
    "IndividualDigest",
    "IndividualSummary",
    "PacingGate",
    "PromptAssembler",
    "ResponseCache",
    "RetryingGenerationClient",
    "build_counselor_summary",
    "build_individual_summary",
    "calculate_streak",
    "completion_rate",
    "get_assistant_runtime",
]
