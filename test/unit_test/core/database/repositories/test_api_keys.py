"""Unit tests for the API key repository."""

from __future__ import annotations

import pytest

from compliance_ai.core.database.entities import ApiKey


@pytest.fixture
async def keys(repos):
    rows = [
        ApiKey(provider="deepseek", key="sk-deepseek-aaaa1111", usage_count=5),
        ApiKey(provider="deepseek", key="sk-deepseek-bbbb2222", usage_count=1),
        ApiKey(provider="deepseek", key="sk-deepseek-cccc3333", usage_count=0, is_active=False),
        ApiKey(provider="gemini", key="gm-key-dddd4444"),
    ]
    for row in rows:
        await repos.api_keys.create(row)
    return rows


class TestApiKeyRepository:
    async def test_list_by_provider(self, repos, keys):
        assert len(await repos.api_keys.list_by_provider("deepseek")) == 3
        assert len(await repos.api_keys.list_by_provider()) == 4

    async def test_list_active(self, repos, keys):
        active = await repos.api_keys.list_active("deepseek")

        assert [k.key for k in active] == ["sk-deepseek-aaaa1111", "sk-deepseek-bbbb2222"]
        assert len(await repos.api_keys.list_active()) == 3

    async def test_get_active_for_provider_prefers_least_used(self, repos, keys):
        key = await repos.api_keys.get_active_for_provider("deepseek")

        assert key.key == "sk-deepseek-bbbb2222"
        assert await repos.api_keys.get_active_for_provider("openai") is None

    async def test_record_usage(self, repos, keys):
        key = await repos.api_keys.record_usage(keys[3])

        assert key.usage_count == 1
        assert key.last_used is not None
        assert key.is_active is True

    async def test_record_usage_deactivates_at_limit(self, repos):
        key = await repos.api_keys.create(ApiKey(provider="openai", key="sk-open-eeee5555", usage_limit=2, usage_count=1))

        key = await repos.api_keys.record_usage(key)

        assert key.usage_count == 2
        assert key.is_active is False

    async def test_deactivate(self, repos, keys):
        key = await repos.api_keys.deactivate(keys[0])

        assert key.is_active is False

    def test_repr_hides_key(self):
        key = ApiKey(id=3, provider="gemini", key="super-secret-value")

        assert "super-secret-value" not in repr(key)
