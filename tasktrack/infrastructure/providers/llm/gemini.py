"""Gemini (Generative Language API) provider implementation."""

from typing import Any

import httpx

from tasktrack.config import Settings
from tasktrack.domain.errors import (
    ProviderHTTPError,
    ProviderMalformedResponseError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from tasktrack.domain.protocols.providers import GenerationProvider, GenerationRequest
from tasktrack.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)


class GeminiProvider:
    """Gemini provider using the generateContent REST endpoint."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.gemini_api_key
        self.base_url = settings.gemini_base_url.rstrip("/")
        self.timeout = settings.gemini_timeout_seconds
        self._model = settings.gemini_model
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "x-goog-api-key": self.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "contents": [
                {"role": turn.role, "parts": [{"text": turn.text}]} for turn in request.turns
            ],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_output_tokens,
            },
        }

    async def generate(self, request: GenerationRequest) -> str:
        """Generate a reply; raises a ProviderError subclass on any failure."""
        logger.debug(
            "Calling Gemini API",
            extra={"model": self._model, "turn_count": len(request.turns)},
        )

        try:
            response = await self.client.post(
                f"/models/{self._model}:generateContent",
                json=self.build_payload(request),
            )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                message="Gemini request timed out",
                provider="gemini",
            ) from e
        except httpx.TransportError as e:
            raise ProviderTransportError(
                message=f"Gemini transport failure: {e}",
                provider="gemini",
            ) from e

        if response.status_code == 429:
            raise ProviderRateLimitError(
                message="Gemini rate limit exceeded",
                provider="gemini",
                details={"body": _safe_json(response)},
            )

        if not response.is_success:
            raise ProviderHTTPError(
                message=f"Gemini service error: {response.status_code}",
                provider="gemini",
                status_code=response.status_code,
                details={"status_code": response.status_code, "body": _safe_json(response)},
            )

        text = _extract_text(_safe_json(response))
        if not text:
            raise ProviderMalformedResponseError(
                message="Gemini response has no reply text",
                provider="gemini",
            )

        return text


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _extract_text(data: Any) -> str | None:
    """Pull candidates[0].content.parts[0].text out of a response body."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


# Protocol compliance
_: type[GenerationProvider] = GeminiProvider  # type: ignore
