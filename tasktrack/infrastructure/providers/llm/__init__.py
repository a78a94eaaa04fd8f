"""LLM provider implementations."""

from tasktrack.infrastructure.providers.llm.gemini import GeminiProvider

__all__ = ["GeminiProvider"]
