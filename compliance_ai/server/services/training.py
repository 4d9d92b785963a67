"""
Training service.

Serves the training catalogue, records per-user progress, issues completion
certificates and renders modules for download.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, List, Tuple

from compliance_ai.core.database.base import utc_now
from compliance_ai.core.database.entities import TrainingModule, TrainingProgress
from compliance_ai.core.database.repositories import SqlRepoBundle
from compliance_ai.core.errors import ResourceNotFoundError, ValidationError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import ActivityType
from compliance_ai.core.models.io.training import TrainingComplete, TrainingModuleRead, TrainingProgressUpdate

from .training_catalog import builtin_modules

logger = get_logger(__name__)

EXPORT_FORMATS = {
    "markdown": ("text/markdown", "md"),
    "json": ("application/json", "json"),
}


def clamp_completion(value: int) -> int:
    return max(0, min(100, value))


def generate_certificate_id() -> str:
    return f"CERT-{uuid.uuid4().hex[:8]}"


def render_markdown(module: TrainingModule) -> str:
    """Render a module with its sections and assessment questions as markdown."""
    lines = [f"# {module.title}", ""]
    if module.description:
        lines += [module.description, ""]
    if module.estimated_time:
        lines += [f"**Estimated time:** {module.estimated_time}", ""]

    if module.topics:
        lines += ["## Topics", ""]
        lines += [f"- {topic}" for topic in module.topics]
        lines.append("")

    if module.role_relevance:
        lines += ["## Role relevance", "", "| Role | Relevance |", "| --- | --- |"]
        lines += [f"| {role.replace('_', ' ').title()} | {level} |" for role, level in module.role_relevance.items()]
        lines.append("")

    content = module.content or {}
    for section in content.get("sections", []):
        lines += [f"## {section.get('title', '')}", "", section.get("content", ""), ""]

    assessments = content.get("assessments", [])
    if assessments:
        lines += ["## Assessment", ""]
        for number, question in enumerate(assessments, start=1):
            lines.append(f"{number}. {question.get('question', '')}")
            lines += [f"   - {option}" for option in question.get("options", [])]
            lines.append("")

    return "\n".join(lines).rstrip() + "\n"


class TrainingService:
    """Training catalogue, progress and certificates."""

    def __init__(self, repos: SqlRepoBundle):
        self.repos = repos

    async def list_modules(self) -> List[TrainingModule]:
        """Stored modules in catalogue order; the built-in set until the table is seeded."""
        modules = await self.repos.training_modules.list()
        return modules or builtin_modules()

    async def get_module(self, module_id: str) -> TrainingModule:
        module = await self.repos.training_modules.get_by_module_id(module_id)
        if module is None:
            module = next((m for m in builtin_modules() if m.module_id == module_id), None)
        if module is None:
            raise ResourceNotFoundError("Training module", module_id)
        return module

    async def update_progress(self, data: TrainingProgressUpdate) -> TrainingProgress:
        """Create or update the progress of a user on a module."""
        await self.get_module(data.module_id)
        completion = clamp_completion(data.completion)
        progress = await self.repos.training_progress.get_for_user_module(data.user_id, data.module_id)
        if progress is None:
            return await self.repos.training_progress.create(
                TrainingProgress(
                    user_id=data.user_id,
                    module_id=data.module_id,
                    completion=completion,
                    assessment_score=data.assessment_score,
                )
            )

        values: Dict[str, Any] = {"completion": completion, "last_attempt_date": utc_now()}
        if data.assessment_score is not None:
            values["assessment_score"] = data.assessment_score
        return await self.repos.training_progress.update_fields(progress, values)

    async def progress_for_user(self, user_id: str) -> List[TrainingProgress]:
        return await self.repos.training_progress.list_by_user(user_id)

    async def complete(self, data: TrainingComplete) -> TrainingProgress:
        """Record full completion and issue a certificate.

        A module completed again keeps its original certificate id.
        """
        module = await self.get_module(data.module_id)
        progress = await self.repos.training_progress.get_for_user_module(data.user_id, data.module_id)
        now = utc_now()
        if progress is None:
            progress = TrainingProgress(user_id=data.user_id, module_id=data.module_id)

        progress.completion = 100
        progress.last_attempt_date = now
        progress.completed_at = now
        if data.assessment_score is not None:
            progress.assessment_score = data.assessment_score
        if not progress.certificate_id:
            progress.certificate_id = generate_certificate_id()

        progress = await self.repos.training_progress.update(progress)
        await self.repos.activities.log(
            ActivityType.training_completed.value,
            f"Completed training module: {module.title}",
            user_id=data.user_id,
            details={"module_id": data.module_id, "certificate_id": progress.certificate_id},
        )
        logger.info(f"Certificate {progress.certificate_id} issued to {data.user_id} for {data.module_id}")
        return progress

    async def certificate(self, certificate_id: str) -> Dict[str, Any]:
        progress = await self.repos.training_progress.get_by_certificate_id(certificate_id)
        if progress is None:
            raise ResourceNotFoundError("Certificate", certificate_id)
        module = await self.repos.training_modules.get_by_module_id(progress.module_id)
        if module is None:
            module = next((m for m in builtin_modules() if m.module_id == progress.module_id), None)
        return {
            "certificate_id": certificate_id,
            "user_id": progress.user_id,
            "module_id": progress.module_id,
            "module_title": module.title if module else None,
            "assessment_score": progress.assessment_score,
            "completed_at": progress.completed_at,
        }

    async def export(self, module_id: str, fmt: str = "markdown") -> Tuple[str, str, str]:
        """Render a module for download.

        Returns:
            Tuple of body, media type and file name

        Raises:
            ValidationError: For formats other than ``markdown`` and ``json``.
        """
        if fmt not in EXPORT_FORMATS:
            raise ValidationError(
                f"Unsupported export format '{fmt}'", details={"supported": sorted(EXPORT_FORMATS)}
            )
        module = await self.get_module(module_id)
        media_type, extension = EXPORT_FORMATS[fmt]
        if fmt == "markdown":
            body = render_markdown(module)
        else:
            body = json.dumps(TrainingModuleRead.model_validate(module).model_dump(mode="json"), indent=2)
        return body, media_type, f"{module.module_id}.{extension}"
