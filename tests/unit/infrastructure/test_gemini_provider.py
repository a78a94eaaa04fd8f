"""Tests for the Gemini provider."""

import json

import httpx
import pytest

from tasktrack.domain.errors import (
    ProviderHTTPError,
    ProviderMalformedResponseError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from tasktrack.domain.protocols.providers import GenerationRequest, GenerationTurn
from tasktrack.infrastructure.providers.llm.gemini import GeminiProvider

REQUEST = GenerationRequest(
    turns=(
        GenerationTurn(role="user", text="context"),
        GenerationTurn(role="model", text="Understood."),
        GenerationTurn(role="user", text="How am I doing?"),
    ),
    temperature=0.7,
    max_output_tokens=512,
)


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def _provider(settings, handler) -> GeminiProvider:
    return GeminiProvider(settings, transport=httpx.MockTransport(handler))


class TestGeminiProvider:
    """Test GeminiProvider.generate."""

    def test_provider_properties(self, settings):
        provider = GeminiProvider(settings)

        assert provider.provider_name == "gemini"
        assert provider.model == "gemma-3-27b-it"

    def test_build_payload(self, settings):
        payload = GeminiProvider(settings).build_payload(REQUEST)

        assert payload["contents"][1] == {"role": "model", "parts": [{"text": "Understood."}]}
        assert payload["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 512}

    @pytest.mark.asyncio
    async def test_successful_generation(self, settings):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_reply("Great progress!"))

        provider = _provider(settings, handler)
        try:
            assert await provider.generate(REQUEST) == "Great progress!"
        finally:
            await provider.close()

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path.endswith("/models/gemma-3-27b-it:generateContent")
        assert request.headers["x-goog-api-key"] == "test_gemini_key"
        body = json.loads(request.content)
        assert len(body["contents"]) == 3

    @pytest.mark.asyncio
    async def test_rate_limit(self, settings):
        provider = _provider(
            settings, lambda r: httpx.Response(429, json={"error": {"code": 429}})
        )

        with pytest.raises(ProviderRateLimitError):
            await provider.generate(REQUEST)

    @pytest.mark.asyncio
    async def test_other_status(self, settings):
        provider = _provider(settings, lambda r: httpx.Response(400, json={"error": "bad"}))

        with pytest.raises(ProviderHTTPError) as exc_info:
            await provider.generate(REQUEST)

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["status_code"] == 400

    @pytest.mark.asyncio
    async def test_missing_text(self, settings):
        provider = _provider(settings, lambda r: httpx.Response(200, json={"candidates": []}))

        with pytest.raises(ProviderMalformedResponseError):
            await provider.generate(REQUEST)

    @pytest.mark.asyncio
    async def test_non_json_body(self, settings):
        provider = _provider(settings, lambda r: httpx.Response(200, text="<html>"))

        with pytest.raises(ProviderMalformedResponseError):
            await provider.generate(REQUEST)

    @pytest.mark.asyncio
    async def test_timeout(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ProviderTimeoutError):
            await _provider(settings, handler).generate(REQUEST)

    @pytest.mark.asyncio
    async def test_connection_error(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ProviderTransportError):
            await _provider(settings, handler).generate(REQUEST)
