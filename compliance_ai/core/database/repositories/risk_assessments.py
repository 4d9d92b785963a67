"""
Risk assessments repository implementation.

This module provides data access for EU AI Act risk assessments.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.risk_assessments import RiskAssessment
from .base import SQLModelRepository


class RiskAssessmentRepository(SQLModelRepository[RiskAssessment]):
    """Repository for risk assessment data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RiskAssessment)

    async def get_by_assessment_id(self, assessment_id: str) -> Optional[RiskAssessment]:
        return await self._first(select(RiskAssessment).where(RiskAssessment.assessment_id == assessment_id))

    async def list_by_system(self, system_id: str) -> List[RiskAssessment]:
        """Assessments of one system, most recent first."""
        stmt = (
            select(RiskAssessment)
            .where(RiskAssessment.system_id == system_id)
            .order_by(RiskAssessment.assessment_date.desc(), RiskAssessment.id.desc())  # type: ignore[attr-defined]
        )
        return await self._all(stmt)

    async def list_recent(self, limit: Optional[int] = None) -> List[RiskAssessment]:
        stmt = select(RiskAssessment).order_by(RiskAssessment.assessment_date.desc())  # type: ignore[attr-defined]
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._all(stmt)

    async def group_by_system(self) -> Dict[str, List[RiskAssessment]]:
        grouped: Dict[str, List[RiskAssessment]] = {}
        for assessment in await self.list_recent():
            grouped.setdefault(assessment.system_id, []).append(assessment)
        return grouped
