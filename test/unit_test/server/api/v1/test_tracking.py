"""Unit tests for the dashboard feed endpoints: departments, activities, alerts, deadlines and documents."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from compliance_ai.core.database.base import utc_now

pytestmark = pytest.mark.asyncio

API = "http://localhost/api/v1"


class TestDepartments:
    async def test_create_and_list_sorted(self, client: AsyncClient):
        for name, score in (("Sales", 40), ("Engineering", 85)):
            response = await client.post(f"{API}/departments", json={"name": name, "compliance_score": score})
            assert response.status_code == 201

        listed = (await client.get(f"{API}/departments")).json()

        assert [(d["name"], d["compliance_score"]) for d in listed] == [("Engineering", 85), ("Sales", 40)]

    async def test_duplicate_name(self, client: AsyncClient):
        await client.post(f"{API}/departments", json={"name": "Legal"})

        response = await client.post(f"{API}/departments", json={"name": "Legal"})

        assert response.status_code == 409

    async def test_score_out_of_range(self, client: AsyncClient):
        response = await client.post(f"{API}/departments", json={"name": "HR", "compliance_score": 101})
        assert response.status_code == 422


class TestActivities:
    async def test_log_and_recent(self, client: AsyncClient):
        for index in range(7):
            await client.post(
                f"{API}/activities",
                json={"type": "note", "description": f"entry {index}", "details": {"index": index}},
            )

        recent = (await client.get(f"{API}/activities/recent")).json()

        assert len(recent) == 5
        assert recent[0]["description"] == "entry 6"
        assert recent[0]["details"] == {"index": 6}

        assert len((await client.get(f"{API}/activities/recent", params={"limit": 2})).json()) == 2


class TestAlerts:
    async def test_critical_and_resolve(self, client: AsyncClient):
        critical = await client.post(
            f"{API}/alerts", json={"type": "compliance", "severity": "critical", "title": "Missing documentation"}
        )
        await client.post(f"{API}/alerts", json={"type": "compliance", "severity": "low", "title": "Minor"})
        alert_id = critical.json()["id"]
        assert critical.json()["is_resolved"] is False

        listed = (await client.get(f"{API}/alerts/critical")).json()
        assert [a["id"] for a in listed] == [alert_id]

        resolved = await client.put(f"{API}/alerts/{alert_id}/resolve")
        assert resolved.status_code == 200
        assert resolved.json()["is_resolved"] is True
        assert (await client.get(f"{API}/alerts/critical")).json() == []

    async def test_resolve_unknown(self, client: AsyncClient):
        response = await client.put(f"{API}/alerts/999/resolve")
        assert response.status_code == 404


class TestDeadlines:
    async def test_upcoming_skips_past_deadlines(self, client: AsyncClient):
        now = utc_now()
        for title, delta in (("Past", -1), ("Far", 60), ("Soon", 5)):
            await client.post(
                f"{API}/deadlines",
                json={"title": title, "type": "regulatory", "date": (now + timedelta(days=delta)).isoformat()},
            )

        upcoming = (await client.get(f"{API}/deadlines/upcoming")).json()

        assert [d["title"] for d in upcoming] == ["Soon", "Far"]

    async def test_timezone_is_dropped(self, client: AsyncClient):
        response = await client.post(
            f"{API}/deadlines", json={"title": "AI Act", "type": "regulatory", "date": "2030-08-02T00:00:00Z"}
        )

        assert response.status_code == 201
        assert response.json()["date"] == "2030-08-02T00:00:00"


class TestDocuments:
    async def test_create_update_and_list(self, client: AsyncClient):
        response = await client.post(
            f"{API}/documents",
            json={"title": "Technical documentation", "type": "technical_documentation", "system_id": "SYS-1"},
        )
        assert response.status_code == 201
        document = response.json()
        assert (document["status"], document["version"]) == ("draft", "1.0")

        activity = (await client.get(f"{API}/activities/recent", params={"limit": 1})).json()[0]
        assert activity["type"] == "document_created"
        assert activity["details"] == {"document_id": document["id"], "type": "technical_documentation"}

        updated = await client.put(f"{API}/documents/{document['id']}", json={"status": "review", "version": "1.1"})
        assert updated.status_code == 200
        assert (updated.json()["status"], updated.json()["version"]) == ("review", "1.1")

        listed = (await client.get(f"{API}/documents/system/SYS-1")).json()
        assert [d["id"] for d in listed] == [document["id"]]
        assert (await client.get(f"{API}/documents/system/SYS-2")).json() == []

    async def test_update_unknown(self, client: AsyncClient):
        response = await client.put(f"{API}/documents/42", json={"status": "final"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Document with ID 42 not found"


async def test_dashboard_summary(client: AsyncClient):
    await client.post(f"{API}/systems", json={"name": "A", "risk_level": "high", "doc_completeness": 40})
    await client.post(f"{API}/systems", json={"name": "B", "risk_level": "limited", "doc_completeness": 80})
    await client.post(f"{API}/departments", json={"name": "Engineering", "compliance_score": 70})

    response = await client.get(f"{API}/dashboard/summary")

    assert response.status_code == 200
    body = response.json()
    assert body["total_systems"] == 2
    assert body["high_risk_systems"] == 1
    assert body["doc_completeness"] == 60
    assert body["risk_distribution"] == {"unacceptable": 0, "high": 1, "limited": 1, "minimal": 0}
    assert body["department_compliance"][0]["name"] == "Engineering"
