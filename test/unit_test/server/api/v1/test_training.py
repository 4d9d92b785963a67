import json

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

BASE = "http://localhost/api/v1/training"


async def test_list_modules_serves_builtin_catalogue(client: AsyncClient):
    response = await client.get(f"{BASE}/modules")

    assert response.status_code == 200
    modules = response.json()
    assert len(modules) == 6
    assert modules[0]["module_id"] == "eu-ai-act-intro"
    assert modules[0]["content"]["sections"]


async def test_module_and_metadata(client: AsyncClient):
    module = (await client.get(f"{BASE}/modules/risk-classification")).json()
    metadata = (await client.get(f"{BASE}/modules/risk-classification/metadata")).json()

    assert module["title"] == metadata["title"] == "Risk Classification System"
    assert "content" not in metadata
    assert (await client.get(f"{BASE}/modules/unknown")).status_code == 404


async def test_progress_round_trip(client: AsyncClient):
    response = await client.post(
        f"{BASE}/progress", json={"user_id": "u1", "module_id": "eu-ai-act-intro", "completion": 120}
    )
    assert response.status_code == 200
    assert response.json()["completion"] == 100

    progress = (await client.get(f"{BASE}/progress", params={"user_id": "u1"})).json()
    assert [(p["module_id"], p["completion"]) for p in progress] == [("eu-ai-act-intro", 100)]
    assert (await client.get(f"{BASE}/progress", params={"user_id": "nobody"})).json() == []


async def test_progress_requires_user_id(client: AsyncClient):
    response = await client.get(f"{BASE}/progress")
    assert response.status_code == 422


async def test_complete_and_certificate(client: AsyncClient):
    response = await client.post(
        f"{BASE}/complete", json={"user_id": "u1", "module_id": "governance-framework", "assessment_score": 90}
    )
    assert response.status_code == 200
    certificate_id = response.json()["certificate_id"]
    assert certificate_id.startswith("CERT-")

    certificate = await client.get(f"{BASE}/certificate/{certificate_id}")
    assert certificate.status_code == 200
    assert certificate.json()["module_title"] == "Governance Framework"
    assert certificate.json()["assessment_score"] == 90

    assert (await client.get(f"{BASE}/certificate/CERT-unknown")).status_code == 404


async def test_export_markdown(client: AsyncClient):
    response = await client.get(f"{BASE}/export/eu-ai-act-intro")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/markdown")
    assert response.headers["content-disposition"] == 'attachment; filename="eu-ai-act-intro.md"'
    assert response.text.startswith("# EU AI Act Introduction")


async def test_export_json(client: AsyncClient):
    response = await client.get(f"{BASE}/export/eu-ai-act-intro", params={"format": "json"})

    assert response.status_code == 200
    assert json.loads(response.text)["module_id"] == "eu-ai-act-intro"


async def test_export_unsupported_format(client: AsyncClient):
    response = await client.get(f"{BASE}/export/eu-ai-act-intro", params={"format": "pdf"})

    assert response.status_code == 400
    assert response.json()["details"] == {"supported": ["json", "markdown"]}
