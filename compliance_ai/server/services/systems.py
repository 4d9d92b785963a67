"""
AI system inventory service.

Registers and updates systems and records both in the activity log.
"""

from __future__ import annotations

import uuid
from typing import List

from compliance_ai.core.database.entities import AISystem
from compliance_ai.core.database.repositories import SqlRepoBundle
from compliance_ai.core.errors import ResourceNotFoundError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import ActivityType, RiskLevel
from compliance_ai.core.models.io.systems import AISystemCreate, AISystemUpdate

logger = get_logger(__name__)


def generate_system_id() -> str:
    return f"AI-SYS-{uuid.uuid4().hex[:8]}"


class AISystemService:
    def __init__(self, repos: SqlRepoBundle):
        self.repos = repos

    async def get(self, system_id: str) -> AISystem:
        system = await self.repos.systems.get_by_system_id(system_id)
        if system is None:
            raise ResourceNotFoundError("AI system", system_id)
        return system

    async def list(self) -> List[AISystem]:
        return await self.repos.systems.list()

    async def high_risk(self, limit: int = 5) -> List[AISystem]:
        return await self.repos.systems.list_high_risk(limit=limit)

    async def create(self, data: AISystemCreate) -> AISystem:
        """Register a system; ``system_id`` is generated when the payload has none."""
        values = data.model_dump(exclude_none=True, mode="json")
        for field in ("implementation_date", "last_assessment_date"):
            if getattr(data, field) is not None:
                values[field] = getattr(data, field)
        values["system_id"] = data.system_id or generate_system_id()

        system = await self.repos.systems.create(AISystem(**values))
        await self.repos.activities.log(
            ActivityType.system_created.value,
            f"New AI system registered: {system.name}",
            user_id=system.created_by,
            system_id=system.system_id,
            details={"risk_level": system.risk_level},
        )
        logger.info(f"Registered AI system {system.system_id}")
        return system

    async def update(self, system_id: str, data: AISystemUpdate) -> AISystem:
        system = await self.get(system_id)
        values = data.model_dump(exclude_unset=True)
        if isinstance(values.get("risk_level"), RiskLevel):
            values["risk_level"] = values["risk_level"].value
        system = await self.repos.systems.update_fields(system, values)
        await self.repos.activities.log(
            ActivityType.system_updated.value,
            f"AI system updated: {system.name}",
            system_id=system.system_id,
            details={"fields": sorted(values)},
        )
        return system

    async def delete(self, system_id: str) -> None:
        system = await self.get(system_id)
        await self.repos.systems.delete(system.id)
        logger.info(f"Deleted AI system {system_id}")
