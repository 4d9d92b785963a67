import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

BASE = "http://localhost/api/v1/regulatory-terms"


async def _add(client: AsyncClient, term: str, language: str = "en", headers=None) -> dict:
    response = await client.post(
        BASE,
        json={"term": term, "definition": f"Definition of {term}", "language": language},
        headers=headers or {},
    )
    assert response.status_code == 201
    return response.json()


async def test_create_records_creator(client: AsyncClient, as_user, officer):
    anonymous = await _add(client, "AI system")
    attributed = await _add(client, "Provider", headers=as_user(officer))

    assert anonymous["created_by"] == "test-admin"
    assert attributed["created_by"] == officer.uid


async def test_list_by_language(client: AsyncClient):
    await _add(client, "Risk")
    await _add(client, "Deployer")
    await _add(client, "Risiko", language="de")

    english = (await client.get(BASE)).json()
    german = (await client.get(BASE, params={"language": "de"})).json()

    assert [t["term"] for t in english] == ["Deployer", "Risk"]
    assert [t["term"] for t in german] == ["Risiko"]


async def test_search_exact_match_first(client: AsyncClient):
    await _add(client, "High-risk AI system")
    await _add(client, "AI system")

    response = await client.get(f"{BASE}/search/ai system")

    assert response.status_code == 200
    assert [t["term"] for t in response.json()] == ["AI system", "High-risk AI system"]
    assert (await client.get(f"{BASE}/search/unknown")).status_code == 404


async def test_get_term(client: AsyncClient):
    created = await _add(client, "Operator")

    assert (await client.get(f"{BASE}/{created['id']}")).json()["term"] == "Operator"
    assert (await client.get(f"{BASE}/999")).status_code == 404


async def test_update_and_delete_require_admin(client: AsyncClient, as_user, admin, officer):
    created = await _add(client, "Operator")
    url = f"{BASE}/{created['id']}"

    assert (await client.put(url, json={"category": "roles"})).status_code == 401
    assert (await client.put(url, json={"category": "roles"}, headers=as_user(officer))).status_code == 403

    updated = await client.put(url, json={"category": "roles"}, headers=as_user(admin))
    assert updated.status_code == 200
    assert updated.json()["category"] == "roles"

    assert (await client.delete(url, headers=as_user(officer))).status_code == 403
    deleted = await client.delete(url, headers=as_user(admin))
    assert deleted.json() == {"success": True}
    assert (await client.delete(url, headers=as_user(admin))).status_code == 404
