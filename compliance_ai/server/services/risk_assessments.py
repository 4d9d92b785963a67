"""
Risk assessment service.

Recording an assessment also stamps the assessed system with the new risk
level, score and assessment date.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List

from compliance_ai.core.database.base import utc_now
from compliance_ai.core.database.entities import RiskAssessment
from compliance_ai.core.database.repositories import SqlRepoBundle
from compliance_ai.core.errors import ResourceNotFoundError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import ActivityType
from compliance_ai.core.models.io.risk_assessments import RiskAssessmentCreate, RiskAssessmentUpdate

logger = get_logger(__name__)


def generate_assessment_id() -> str:
    return f"RA-{uuid.uuid4().hex[:8]}"


class RiskAssessmentService:
    def __init__(self, repos: SqlRepoBundle):
        self.repos = repos

    async def get(self, assessment_pk: int) -> RiskAssessment:
        assessment = await self.repos.risk_assessments.get_by_id(assessment_pk)
        if assessment is None:
            raise ResourceNotFoundError("Risk assessment", assessment_pk)
        return assessment

    async def list_for_system(self, system_id: str) -> List[RiskAssessment]:
        return await self.repos.risk_assessments.list_by_system(system_id)

    async def create(self, data: RiskAssessmentCreate) -> RiskAssessment:
        system = await self.repos.systems.get_by_system_id(data.system_id)
        if system is None:
            raise ResourceNotFoundError("AI system", data.system_id)

        values = data.model_dump(exclude_none=True, mode="json")
        values["assessment_id"] = data.assessment_id or generate_assessment_id()
        values["assessment_date"] = data.assessment_date or utc_now()
        assessment = await self.repos.risk_assessments.create(RiskAssessment(**values))

        await self.repos.systems.update_fields(
            system,
            {
                "risk_level": assessment.risk_level,
                "risk_score": assessment.risk_score,
                "last_assessment_date": assessment.assessment_date,
            },
        )
        await self.repos.activities.log(
            ActivityType.risk_assessment.value,
            f"Risk assessment {assessment.assessment_id} recorded for {system.name}",
            user_id=assessment.created_by,
            system_id=system.system_id,
            details={"risk_level": assessment.risk_level, "risk_score": assessment.risk_score},
        )
        logger.info(f"Recorded risk assessment {assessment.assessment_id} for {system.system_id}")
        return assessment

    async def update(self, assessment_pk: int, data: RiskAssessmentUpdate) -> RiskAssessment:
        assessment = await self.get(assessment_pk)
        return await self.repos.risk_assessments.update_fields(
            assessment, data.model_dump(exclude_unset=True, mode="json")
        )

    async def systems_with_assessments(self) -> List[Dict[str, Any]]:
        """Every registered system with its assessments, newest first."""
        grouped = await self.repos.risk_assessments.group_by_system()
        return [
            {"system": system, "assessments": grouped.get(system.system_id, [])}
            for system in await self.repos.systems.list()
        ]
