"""Unit tests for the stored API key health check."""

import pytest

from compliance_ai.core.database.entities import ApiKey
from compliance_ai.core.errors import AuthenticationError, RateLimitError
from compliance_ai.scripts import check_ai_keys as script

pytestmark = pytest.mark.asyncio


@pytest.fixture
def outcomes(monkeypatch):
    """Map key value to the error the provider check raises, if any."""
    results = {}

    async def fake_check_key(provider, api_key, *, client=None):
        if api_key in results:
            raise results[api_key]

    monkeypatch.setattr(script, "check_key", fake_check_key)
    return results


async def test_no_active_keys(session, outcomes):
    assert await script.check_ai_keys(session) == {"working": 0, "deactivated": 0, "failed": 0}


async def test_classifies_each_key(session, repos, outcomes):
    good = await repos.api_keys.create(ApiKey(provider="deepseek", key="sk-good-000000"))
    revoked = await repos.api_keys.create(ApiKey(provider="gemini", key="gm-revoked-0000"))
    limited = await repos.api_keys.create(ApiKey(provider="openai", key="sk-limited-0000"))
    await repos.api_keys.create(ApiKey(provider="deepseek", key="sk-off-00000000", is_active=False))
    outcomes["gm-revoked-0000"] = AuthenticationError("invalid api key")
    outcomes["sk-limited-0000"] = RateLimitError()

    summary = await script.check_ai_keys(session)

    assert summary == {"working": 1, "deactivated": 1, "failed": 1}
    assert good.usage_count == 1 and good.is_active
    assert revoked.is_active is False
    assert limited.is_active and limited.usage_count == 1
    assert limited.last_used is not None


async def test_google_search_key_needs_engine_id(monkeypatch):
    from compliance_ai.core.errors import ConfigurationError
    from compliance_ai.server.core.config import settings

    monkeypatch.setattr(settings.google_search, "engine_id", None)

    with pytest.raises(ConfigurationError):
        await script.check_key("google_search", "g-key")
