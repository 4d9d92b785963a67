"""Unit tests for the AI assistant and AI key endpoints."""

import pytest
from httpx import AsyncClient

from compliance_ai.ai_services import providers
from compliance_ai.ai_services.api_key_manager import api_key_manager
from compliance_ai.ai_services.providers import AIResponse
from compliance_ai.core.errors import AuthenticationError, RateLimitError
from compliance_ai.server.api.v1 import ai as ai_module
from compliance_ai.server.api.v1 import ai_keys as ai_keys_module

pytestmark = pytest.mark.asyncio

AI = "http://localhost/api/v1/ai"
KEYS = "http://localhost/api/v1/ai-keys"


@pytest.fixture
def fake_deepseek(monkeypatch: pytest.MonkeyPatch):
    prompts = []

    async def _call(prompt, api_key, **kwargs):
        prompts.append((prompt, api_key, kwargs))
        return AIResponse(text="High-risk systems are listed in Annex III.", provider="deepseek", tokens=9)

    monkeypatch.setitem(providers.PROVIDER_CALLS, "deepseek", _call)
    return prompts


class TestGenerate:
    async def test_generate_with_fallback_chain(self, client: AsyncClient, fake_deepseek):
        api_key_manager.register_keys("deepseek", ["sk-deep"], retry_delay=0)

        response = await client.post(f"{AI}/generate", json={"prompt": "Which systems are high risk?"})

        assert response.status_code == 200
        assert response.json() == {
            "text": "High-risk systems are listed in Annex III.",
            "provider": "deepseek",
            "tokens": 9,
        }
        prompt, api_key, kwargs = fake_deepseek[0]
        assert (prompt, api_key) == ("Which systems are high risk?", "sk-deep")
        assert kwargs["max_tokens"] == 1000

    async def test_unknown_model(self, client: AsyncClient):
        response = await client.post(f"{AI}/generate", json={"prompt": "hi", "model": "llama"})

        assert response.status_code == 400
        assert response.json()["error_type"] == "validation_error"

    async def test_no_provider_available(self, client: AsyncClient):
        response = await client.post(f"{AI}/generate", json={"prompt": "hi"})

        assert response.status_code == 500
        body = response.json()
        assert body["detail"] == "All AI providers failed"
        assert body["error_type"] == "ai_model_error"

    async def test_empty_prompt(self, client: AsyncClient):
        response = await client.post(f"{AI}/generate", json={"prompt": ""})
        assert response.status_code == 422


class TestSearchAndStatus:
    async def test_search(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
        calls = []

        async def fake_search(query, **kwargs):
            calls.append((query, kwargs))
            return [{"title": "EU AI Act", "url": "https://example.eu", "description": "", "thumbnail_url": None}]

        monkeypatch.setattr(ai_module, "google_search", fake_search)

        response = await client.get(f"{AI}/search", params={"q": "ai act", "num": 3, "siteSearch": "europa.eu"})

        assert response.status_code == 200
        assert response.json()["results"][0]["title"] == "EU AI Act"
        assert calls == [("ai act", {"num": 3, "site_search": "europa.eu", "exact_terms": None})]

    async def test_search_requires_query(self, client: AsyncClient):
        response = await client.get(f"{AI}/search")
        assert response.status_code == 422

    async def test_status_shows_registered_providers_only(self, client: AsyncClient):
        api_key_manager.register_keys("gemini", ["gem-key-1", "gem-key-2"])
        api_key_manager.report_error("gemini", "gem-key-1", AuthenticationError("bad key"))

        response = await client.get(f"{AI}/status")

        assert response.status_code == 200
        providers_status = response.json()["providers"]
        assert list(providers_status) == ["gemini"]
        assert providers_status["gemini"]["available_keys"] == 1
        assert [k["key_prefix"] for k in providers_status["gemini"]["keys"]] == ["gem-k...", "gem-k..."]
        assert providers_status["gemini"]["keys"][0]["disabled"] is True


class TestStoredKeys:
    async def _store(self, client: AsyncClient, provider: str = "deepseek", key: str = "sk-1234567890abcdef", **extra):
        response = await client.post(KEYS, json={"provider": provider, "key": key, **extra})
        assert response.status_code == 201
        return response.json()

    async def test_create_masks_key(self, client: AsyncClient):
        stored = await self._store(client, description="primary")

        assert stored["masked_key"] == "sk-1...cdef"
        assert "key" not in stored
        assert stored["is_active"] is True

    async def test_list_filtered_by_provider(self, client: AsyncClient):
        await self._store(client, "deepseek")
        await self._store(client, "gemini", "gm-abcdefghijkl")

        assert len((await client.get(KEYS)).json()) == 2
        gemini = (await client.get(KEYS, params={"provider": "gemini"})).json()
        assert [k["provider"] for k in gemini] == ["gemini"]

    async def test_unknown_provider_rejected(self, client: AsyncClient):
        response = await client.post(KEYS, json={"provider": "acme", "key": "k"})
        assert response.status_code == 422

    async def test_update(self, client: AsyncClient):
        stored = await self._store(client)

        response = await client.put(f"{KEYS}/{stored['id']}", json={"key": "  sk-new-key-000000  ", "is_active": False})

        assert response.status_code == 200
        assert response.json()["masked_key"] == "sk-n...0000"
        assert response.json()["is_active"] is False

    async def test_update_with_empty_key(self, client: AsyncClient):
        stored = await self._store(client)

        response = await client.put(f"{KEYS}/{stored['id']}", json={"key": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "API key must not be empty"

    async def test_update_and_delete_unknown(self, client: AsyncClient):
        assert (await client.put(f"{KEYS}/99", json={"description": "x"})).status_code == 404
        assert (await client.delete(f"{KEYS}/99")).status_code == 404

    async def test_delete(self, client: AsyncClient):
        stored = await self._store(client)

        assert (await client.delete(f"{KEYS}/{stored['id']}")).status_code == 204
        assert (await client.get(KEYS)).json() == []


class TestKeyCheck:
    async def test_successful_check_records_usage(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
        await client.post(KEYS, json={"provider": "deepseek", "key": "sk-1234567890abcdef"})

        async def fake_test(provider, api_key, **kwargs):
            return AIResponse(text="Hello", provider=provider)

        monkeypatch.setattr(ai_keys_module, "test_provider_key", fake_test)

        response = await client.get(f"{KEYS}/test/deepseek")

        assert response.status_code == 200
        assert response.json() == {
            "provider": "deepseek",
            "success": True,
            "message": "API key is valid",
            "masked_key": "sk-1...cdef",
        }
        assert (await client.get(KEYS)).json()[0]["usage_count"] == 1

    async def test_rejected_key_is_deactivated(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
        await client.post(KEYS, json={"provider": "gemini", "key": "gm-abcdefghijkl"})

        async def fake_test(provider, api_key, **kwargs):
            raise AuthenticationError("gemini rejected the API key: API key not valid")

        monkeypatch.setattr(ai_keys_module, "test_provider_key", fake_test)

        response = await client.get(f"{KEYS}/test/gemini")

        assert response.status_code == 200
        assert response.json()["success"] is False
        assert (await client.get(KEYS)).json()[0]["is_active"] is False

    async def test_transient_failure_keeps_key_active(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
        await client.post(KEYS, json={"provider": "openai", "key": "sk-openai-000000"})

        async def fake_test(provider, api_key, **kwargs):
            raise RateLimitError("openai rate limit exceeded")

        monkeypatch.setattr(ai_keys_module, "test_provider_key", fake_test)

        response = await client.get(f"{KEYS}/test/openai")

        assert response.json()["message"] == "openai rate limit exceeded"
        assert (await client.get(KEYS)).json()[0]["is_active"] is True

    async def test_no_active_key(self, client: AsyncClient):
        response = await client.get(f"{KEYS}/test/deepseek")

        assert response.status_code == 404
        assert response.json()["detail"] == "No active API key found for provider 'deepseek'"

    async def test_provider_without_key_check(self, client: AsyncClient):
        response = await client.get(f"{KEYS}/test/cohere")
        assert response.status_code == 400
