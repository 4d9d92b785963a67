"""Unit tests for the DeepSeek, OpenAI and Gemini HTTP clients."""

from __future__ import annotations

import json

import httpx
import pytest

from compliance_ai.ai_services import providers
from compliance_ai.ai_services.providers import AIResponse, call_deepseek, call_gemini, call_openai
from compliance_ai.core.errors import (
    AIModelError,
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    RateLimitError,
    ServiceUnavailableError,
)


@pytest.fixture(autouse=True)
def _mock_urls(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(providers, "DEEPSEEK_URL", "https://mock.deepseek/v1/chat/completions")
    monkeypatch.setattr(providers, "OPENAI_URL", "https://mock.openai/v1/chat/completions")
    monkeypatch.setattr(providers, "GEMINI_URL", "https://mock.gemini/v1beta/models/{model}:generateContent")


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _chat_payload(text: str = "Hello", total_tokens: int = 12) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": text}}],
        "usage": {"total_tokens": total_tokens},
    }


class TestChatCompletions:
    async def test_deepseek_request_and_response(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_chat_payload("Article 6 applies"))

        async with _client(handler) as client:
            result = await call_deepseek("Is my system high risk?", "sk-deep", client=client)

        assert result == AIResponse(text="Article 6 applies", provider="deepseek", tokens=12)
        assert captured["url"] == "https://mock.deepseek/v1/chat/completions"
        assert captured["auth"] == "Bearer sk-deep"
        body = captured["body"]
        assert body["model"] == "deepseek-chat"
        assert body["messages"][0] == {"role": "system", "content": providers.DEFAULT_SYSTEM_PROMPT}
        assert body["messages"][1] == {"role": "user", "content": "Is my system high risk?"}
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 1000

    async def test_openai_uses_custom_system_prompt_and_model(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_chat_payload("ok"))

        async with _client(handler) as client:
            result = await call_openai(
                "Summarise",
                "sk-open",
                system_prompt="Be brief",
                model="gpt-4o-mini",
                temperature=0.2,
                max_tokens=50,
                client=client,
            )

        assert result.provider == "openai"
        assert captured["url"].startswith("https://mock.openai/")
        assert captured["body"]["model"] == "gpt-4o-mini"
        assert captured["body"]["messages"][0]["content"] == "Be brief"
        assert captured["body"]["max_tokens"] == 50

    async def test_missing_usage_leaves_tokens_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": [{"message": {"content": "hi"}}]})

        async with _client(handler) as client:
            result = await call_deepseek("x", "k", client=client)

        assert result.tokens is None

    async def test_unexpected_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": []})

        async with _client(handler) as client:
            with pytest.raises(AIModelError, match="Unexpected response format from deepseek"):
                await call_deepseek("x", "k", client=client)


class TestStatusMapping:
    @pytest.mark.parametrize(
        "status,error_cls",
        [
            (429, RateLimitError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (500, ExternalServiceError),
            (400, ExternalServiceError),
        ],
    )
    async def test_http_errors(self, status, error_cls):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"error": {"message": "provider said no"}})

        async with _client(handler) as client:
            with pytest.raises(error_cls) as exc_info:
                await call_deepseek("x", "k", client=client)

        assert exc_info.value.details["status_code"] == status
        assert exc_info.value.details["message"] == "provider said no"

    async def test_plain_text_error_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad gateway")

        async with _client(handler) as client:
            with pytest.raises(ExternalServiceError) as exc_info:
                await call_openai("x", "k", client=client)

        assert exc_info.value.details["message"] == "Bad gateway"

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ServiceUnavailableError, match="Could not reach deepseek"):
                await call_deepseek("x", "k", client=client)

    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with _client(handler) as client:
            with pytest.raises(ServiceUnavailableError, match="deepseek request timed out"):
                await call_deepseek("x", "k", client=client)


class TestGemini:
    async def test_request_and_response(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = request.url
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "candidates": [{"content": {"parts": [{"text": "Part one. "}, {"text": "Part two."}]}}],
                    "usageMetadata": {"totalTokenCount": 30},
                },
            )

        async with _client(handler) as client:
            result = await call_gemini("Explain Annex III", "g-key", system_prompt="Expert", client=client)

        assert result == AIResponse(text="Part one. Part two.", provider="gemini", tokens=30)
        assert captured["url"].path == "/v1beta/models/gemini-pro:generateContent"
        assert captured["url"].params["key"] == "g-key"
        assert captured["body"]["contents"][0]["parts"][0]["text"] == "Expert\n\nExplain Annex III"
        assert captured["body"]["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 1000}

    async def test_unexpected_payload(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"candidates": []})

        async with _client(handler) as client:
            with pytest.raises(AIModelError, match="Unexpected response format from gemini"):
                await call_gemini("x", "k", client=client)

    async def test_rejected_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"message": "API key not valid"}})

        async with _client(handler) as client:
            with pytest.raises(AuthenticationError):
                await call_gemini("x", "k", client=client)


class TestProviderKeyCheck:
    async def test_sends_short_prompt(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_chat_payload("Hello!"))

        async with _client(handler) as client:
            result = await providers.test_provider_key("deepseek", "sk", client=client)

        assert result.text == "Hello!"
        assert captured["body"]["messages"][1]["content"] == providers.KEY_TEST_PROMPT
        assert captured["body"]["max_tokens"] == 10
        assert captured["body"]["temperature"] == 0.1

    async def test_unsupported_provider(self):
        with pytest.raises(ConfigurationError, match="not supported for provider 'cohere'"):
            await providers.test_provider_key("cohere", "k")


def test_raise_for_provider_status_passes_success():
    response = httpx.Response(200, json={}, request=httpx.Request("POST", "https://mock.api"))

    assert providers.raise_for_provider_status("deepseek", response) is None
