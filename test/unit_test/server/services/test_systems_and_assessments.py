"""Unit tests for the AI system and risk assessment services."""

from __future__ import annotations

from datetime import datetime

import pytest

from compliance_ai.core.database.entities import AISystem
from compliance_ai.core.errors import ResourceNotFoundError
from compliance_ai.core.models.io.risk_assessments import RiskAssessmentCreate, RiskAssessmentUpdate
from compliance_ai.core.models.io.systems import AISystemCreate, AISystemUpdate
from compliance_ai.server.services.risk_assessments import RiskAssessmentService
from compliance_ai.server.services.systems import AISystemService


@pytest.fixture
def systems(repos) -> AISystemService:
    return AISystemService(repos)


@pytest.fixture
def assessments(repos) -> RiskAssessmentService:
    return RiskAssessmentService(repos)


class TestSystems:
    async def test_register_normalises_form_input(self, systems, repos):
        system = await systems.create(
            AISystemCreate(
                name="CV Screener",
                department="HR",
                risk_level="high",
                implementation_date="2024-03-01T00:00:00Z",
                last_assessment_date="",
                ai_capabilities=["ranking", "nlp"],
                keywords="hiring, cv ,",
                created_by="tech-1",
            )
        )

        assert system.system_id.startswith("AI-SYS-")
        assert system.risk_level == "high"
        assert system.implementation_date == datetime(2024, 3, 1)
        assert system.last_assessment_date is None
        assert system.ai_capabilities == "ranking, nlp"
        assert system.keywords == ["hiring", "cv"]

        activity = (await repos.activities.recent(1))[0]
        assert activity.type == "system_created"
        assert activity.system_id == system.system_id
        assert activity.user_id == "tech-1"

    async def test_register_keeps_given_system_id(self, systems):
        system = await systems.create(AISystemCreate(system_id="SYS-42", name="Chatbot"))

        assert system.system_id == "SYS-42"
        assert await systems.get("SYS-42") is not None

    async def test_update_logs_changed_fields(self, systems, repos):
        await systems.create(AISystemCreate(system_id="SYS-1", name="Chatbot"))

        system = await systems.update("SYS-1", AISystemUpdate(risk_level="limited", doc_completeness=60))

        assert system.risk_level == "limited"
        assert system.doc_completeness == 60
        activity = (await repos.activities.recent(1))[0]
        assert activity.type == "system_updated"
        assert activity.details == {"fields": ["doc_completeness", "risk_level"]}

    async def test_unknown_system(self, systems):
        with pytest.raises(ResourceNotFoundError, match="AI system with ID SYS-404 not found"):
            await systems.update("SYS-404", AISystemUpdate(name="x"))

    async def test_delete(self, systems):
        await systems.create(AISystemCreate(system_id="SYS-1", name="Chatbot"))

        await systems.delete("SYS-1")

        assert await systems.list() == []
        with pytest.raises(ResourceNotFoundError):
            await systems.delete("SYS-1")

    async def test_high_risk(self, systems, repos):
        await repos.systems.create(AISystem(system_id="a", name="A", risk_level="high", risk_score=70))
        await repos.systems.create(AISystem(system_id="b", name="B", risk_level="minimal", risk_score=10))
        await repos.systems.create(AISystem(system_id="c", name="C", risk_level="high", risk_score=90))

        assert [s.system_id for s in await systems.high_risk()] == ["c", "a"]


class TestRiskAssessments:
    async def test_create_updates_the_system(self, assessments, repos):
        await repos.systems.create(AISystem(system_id="SYS-1", name="Credit model", risk_level="minimal"))

        assessment = await assessments.create(
            RiskAssessmentCreate(
                system_id="SYS-1",
                risk_level="high",
                risk_score=85,
                compliance_gaps=[{"article": "10", "gap": "No bias testing"}],
                created_by="officer-1",
            )
        )

        assert assessment.assessment_id.startswith("RA-")
        assert assessment.compliance_gaps == [{"article": "10", "gap": "No bias testing"}]
        system = await repos.systems.get_by_system_id("SYS-1")
        assert system.risk_level == "high"
        assert system.risk_score == 85
        assert system.last_assessment_date == assessment.assessment_date

        activity = (await repos.activities.recent(1))[0]
        assert activity.type == "risk_assessment"
        assert activity.details == {"risk_level": "high", "risk_score": 85}

    async def test_create_for_unknown_system(self, assessments):
        with pytest.raises(ResourceNotFoundError):
            await assessments.create(RiskAssessmentCreate(system_id="ghost", risk_level="minimal"))

    async def test_update_and_get(self, assessments, repos):
        await repos.systems.create(AISystem(system_id="SYS-1", name="Credit model"))
        created = await assessments.create(RiskAssessmentCreate(system_id="SYS-1", risk_level="limited"))

        updated = await assessments.update(created.id, RiskAssessmentUpdate(status="completed", summary_notes="Done"))

        assert updated.status == "completed"
        assert updated.risk_level == "limited"
        assert (await assessments.get(created.id)).summary_notes == "Done"

    async def test_get_unknown(self, assessments):
        with pytest.raises(ResourceNotFoundError):
            await assessments.get(999)

    async def test_systems_with_assessments(self, assessments, repos):
        await repos.systems.create(AISystem(system_id="SYS-1", name="One"))
        await repos.systems.create(AISystem(system_id="SYS-2", name="Two"))
        await assessments.create(RiskAssessmentCreate(system_id="SYS-1", risk_level="high"))
        await assessments.create(RiskAssessmentCreate(system_id="SYS-1", risk_level="limited"))

        grouped = await assessments.systems_with_assessments()

        assert [(g["system"].system_id, len(g["assessments"])) for g in grouped] == [("SYS-1", 2), ("SYS-2", 0)]
        assert len(await assessments.list_for_system("SYS-1")) == 2
