"""Unit tests for the training service."""

from __future__ import annotations

import json
import re

import pytest

from compliance_ai.core.database.entities import TrainingModule
from compliance_ai.core.errors import ResourceNotFoundError, ValidationError
from compliance_ai.core.models.io.training import TrainingComplete, TrainingProgressUpdate
from compliance_ai.server.services.training import TrainingService, clamp_completion, render_markdown
from compliance_ai.server.services.training_catalog import BUILTIN_MODULES, builtin_modules


@pytest.fixture
def service(repos) -> TrainingService:
    return TrainingService(repos)


@pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (42, 42), (100, 100), (150, 100)])
def test_clamp_completion(value, expected):
    assert clamp_completion(value) == expected


def test_builtin_catalogue_is_ordered():
    modules = builtin_modules()

    assert [m.order for m in modules] == list(range(1, len(BUILTIN_MODULES) + 1))
    assert modules[0].module_id == "eu-ai-act-intro"
    assert all(m.id is None for m in modules)


class TestCatalogue:
    async def test_builtin_modules_until_seeded(self, service):
        modules = await service.list_modules()

        assert [m.module_id for m in modules] == [m["module_id"] for m in BUILTIN_MODULES]

    async def test_stored_modules_replace_builtin(self, service, repos):
        await repos.training_modules.create(TrainingModule(module_id="b", title="B", order=2))
        await repos.training_modules.create(TrainingModule(module_id="a", title="A", order=1))

        assert [m.module_id for m in await service.list_modules()] == ["a", "b"]

    async def test_get_module_falls_back_to_builtin(self, service):
        module = await service.get_module("risk-classification")

        assert module.title == "Risk Classification System"

    async def test_get_unknown_module(self, service):
        with pytest.raises(ResourceNotFoundError, match="Training module with ID nope not found"):
            await service.get_module("nope")


class TestProgress:
    async def test_first_update_creates_progress(self, service):
        progress = await service.update_progress(
            TrainingProgressUpdate(user_id="u1", module_id="eu-ai-act-intro", completion=150, assessment_score=80)
        )

        assert progress.id is not None
        assert progress.completion == 100
        assert progress.assessment_score == 80

    async def test_update_keeps_score_when_omitted(self, service):
        await service.update_progress(
            TrainingProgressUpdate(user_id="u1", module_id="eu-ai-act-intro", completion=30, assessment_score=70)
        )

        progress = await service.update_progress(
            TrainingProgressUpdate(user_id="u1", module_id="eu-ai-act-intro", completion=-10)
        )

        assert progress.completion == 0
        assert progress.assessment_score == 70
        assert len(await service.progress_for_user("u1")) == 1

    async def test_unknown_module_is_rejected(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.update_progress(TrainingProgressUpdate(user_id="u1", module_id="ghost", completion=10))


class TestCompletion:
    async def test_complete_issues_certificate(self, service, repos):
        progress = await service.complete(
            TrainingComplete(user_id="u1", module_id="governance-framework", assessment_score=95)
        )

        assert progress.completion == 100
        assert progress.completed_at is not None
        assert re.fullmatch(r"CERT-[0-9a-f]{8}", progress.certificate_id)

        activity = (await repos.activities.recent(1))[0]
        assert activity.type == "training_completed"
        assert activity.description == "Completed training module: Governance Framework"
        assert activity.details["certificate_id"] == progress.certificate_id

    async def test_completing_again_keeps_certificate(self, service):
        first = await service.complete(TrainingComplete(user_id="u1", module_id="eu-ai-act-intro"))
        certificate_id = first.certificate_id

        second = await service.complete(TrainingComplete(user_id="u1", module_id="eu-ai-act-intro", assessment_score=60))

        assert second.certificate_id == certificate_id
        assert second.assessment_score == 60

    async def test_complete_existing_progress(self, service):
        await service.update_progress(TrainingProgressUpdate(user_id="u1", module_id="eu-ai-act-intro", completion=50))

        progress = await service.complete(TrainingComplete(user_id="u1", module_id="eu-ai-act-intro"))

        assert progress.completion == 100
        assert len(await service.progress_for_user("u1")) == 1

    async def test_certificate_lookup(self, service):
        progress = await service.complete(
            TrainingComplete(user_id="u1", module_id="risk-classification", assessment_score=88)
        )

        certificate = await service.certificate(progress.certificate_id)

        assert certificate["user_id"] == "u1"
        assert certificate["module_title"] == "Risk Classification System"
        assert certificate["assessment_score"] == 88

    async def test_unknown_certificate(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.certificate("CERT-00000000")


class TestExport:
    async def test_markdown(self, service):
        body, media_type, filename = await service.export("eu-ai-act-intro")

        assert media_type == "text/markdown"
        assert filename == "eu-ai-act-intro.md"
        assert body.startswith("# EU AI Act Introduction\n")
        assert "**Estimated time:** 45 minutes" in body
        assert "| Decision Maker | High |" in body
        assert "## Assessment" in body
        assert "   - Medium Risk" in body

    async def test_json(self, service):
        body, media_type, filename = await service.export("technical-requirements", "json")

        assert media_type == "application/json"
        assert filename == "technical-requirements.json"
        payload = json.loads(body)
        assert payload["title"] == "Technical Requirements"
        assert payload["content"]["sections"][0]["title"] == "Data Governance"

    async def test_unsupported_format(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.export("eu-ai-act-intro", "pdf")

        assert exc_info.value.details == {"supported": ["json", "markdown"]}


def test_render_markdown_minimal_module():
    assert render_markdown(TrainingModule(module_id="m", title="Bare")) == "# Bare\n"
