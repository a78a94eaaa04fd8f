"""Paced, retrying wrapper around a generation provider."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from opentelemetry import trace

from tasktrack.application.assistant.pacing import PacingGate
from tasktrack.application.assistant.response_cache import CacheKey, ResponseCache
from tasktrack.domain.errors import (
    ProviderError,
    ProviderHTTPError,
    ProviderMalformedResponseError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from tasktrack.domain.protocols.providers import GenerationProvider, GenerationRequest
from tasktrack.infrastructure.telemetry import create_span
from tasktrack.infrastructure.telemetry.logging import get_logger
from tasktrack.infrastructure.telemetry.metrics import (
    record_fallback,
    record_generation_attempt,
)

logger = get_logger(__name__)

_RETRYABLE = (ProviderRateLimitError, ProviderTransportError, ProviderTimeoutError)


def _outcome(error: ProviderError) -> str:
    if isinstance(error, ProviderRateLimitError):
        return "rate_limited"
    if isinstance(error, ProviderTimeoutError):
        return "timeout"
    if isinstance(error, ProviderTransportError):
        return "transport_error"
    if isinstance(error, ProviderMalformedResponseError):
        return "malformed"
    if isinstance(error, ProviderHTTPError):
        return "http_error"
    return "provider_error"


class RetryingGenerationClient:
    """Calls the provider with pacing, bounded retries and exponential backoff.

    Rate limits and transport failures are retried up to `max_attempts`
    total attempts, sleeping `initial_backoff_seconds` and doubling after
    each failure. Any other failure gives up immediately. A successful reply
    is written to the response cache.

    `generate` never raises for provider failures; it returns None and the
    caller degrades to the local fallback.
    """

    def __init__(
        self,
        provider: GenerationProvider,
        gate: PacingGate,
        cache: ResponseCache,
        max_attempts: int = 3,
        initial_backoff_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.provider = provider
        self.gate = gate
        self.cache = cache
        self.max_attempts = max(1, max_attempts)
        self.initial_backoff_seconds = initial_backoff_seconds
        self._sleep = sleep

    async def generate(self, request: GenerationRequest, cache_key: CacheKey) -> str | None:
        await self.gate.wait()

        delay = self.initial_backoff_seconds
        for attempt in range(1, self.max_attempts + 1):
            start = time.perf_counter()
            with create_span(
                "assistant.generate",
                attributes={
                    "generation.provider": self.provider.provider_name,
                    "generation.model": self.provider.model,
                    "generation.attempt": attempt,
                },
                kind=trace.SpanKind.CLIENT,
            ) as span:
                try:
                    text = await self.provider.generate(request)
                except _RETRYABLE as e:
                    self._record(_outcome(e), start)
                    span.set_attribute("generation.outcome", _outcome(e))
                    if attempt == self.max_attempts:
                        logger.warning(
                            "Generation retries exhausted",
                            extra={"attempts": attempt, "error_code": e.code},
                        )
                        record_fallback(_outcome(e))
                        return None
                    logger.warning(
                        "Generation attempt failed, retrying",
                        extra={
                            "attempt": attempt,
                            "max_attempts": self.max_attempts,
                            "delay_seconds": delay,
                            "error_code": e.code,
                        },
                    )
                except ProviderError as e:
                    self._record(_outcome(e), start)
                    span.set_attribute("generation.outcome", _outcome(e))
                    logger.error(
                        "Generation failed",
                        extra={"attempt": attempt, "error_code": e.code, "details": e.details},
                    )
                    record_fallback(_outcome(e))
                    return None
                except Exception:
                    self._record("unexpected", start)
                    logger.exception("Unexpected generation failure", extra={"attempt": attempt})
                    record_fallback("unexpected")
                    return None
                else:
                    self._record("success", start)
                    span.set_attribute("generation.outcome", "success")
                    self.cache.put(cache_key, text)
                    logger.info(
                        "Generation succeeded",
                        extra={"attempt": attempt, "reply_length": len(text)},
                    )
                    return text

            await self._sleep(delay)
            delay *= 2

        return None

    def _record(self, outcome: str, start: float) -> None:
        record_generation_attempt(
            provider=self.provider.provider_name,
            model=self.provider.model,
            outcome=outcome,
            duration_seconds=time.perf_counter() - start,
        )
