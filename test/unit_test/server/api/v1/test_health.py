import pytest
from httpx import AsyncClient

from compliance_ai.ai_services.api_key_manager import api_key_manager

# Mark all tests in this module as async
pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("http://localhost/version")
    assert response.status_code == 200
    assert response.json() == {"version": "1.0.0", "schema_version": "v1"}


async def test_services_health(client: AsyncClient):
    api_key_manager.register_keys("deepseek", ["sk-1", "sk-2"])

    response = await client.get("http://localhost/api/v1/health/services")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == {"status": "ok"}
    assert data["ai_providers"]["deepseek"] == {"configured": True, "available_keys": 2}
    assert data["ai_providers"]["gemini"] == {"configured": False, "available_keys": 0}


async def test_process_time_header(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert "X-Process-Time" in response.headers
