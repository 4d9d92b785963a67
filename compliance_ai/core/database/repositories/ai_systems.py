"""
AI systems repository implementation.

This module provides data access operations for the AI system inventory,
including the aggregates shown on the compliance dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.ai_systems import AISystem
from .base import SQLModelRepository


class AISystemRepository(SQLModelRepository[AISystem]):
    """Repository for AI system data access operations using SQLModel."""

    default_order = "id"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AISystem)

    async def get_by_system_id(self, system_id: str) -> Optional[AISystem]:
        return await self._first(select(AISystem).where(AISystem.system_id == system_id))

    async def list_high_risk(self, limit: int = 5) -> List[AISystem]:
        """List systems classified as high risk, highest score first.

        Args:
            limit: Maximum number of systems to return

        Returns:
            List of AISystem instances
        """
        stmt = (
            select(AISystem)
            .where(AISystem.risk_level == "high")
            .order_by(AISystem.risk_score.desc(), AISystem.id)  # type: ignore[union-attr]
            .limit(limit)
        )
        return await self._all(stmt)

    async def count_by_risk_level(self) -> Dict[str, int]:
        return await self.count_by("risk_level")

    async def average_completeness(self) -> Dict[str, float]:
        """Average documentation and training completeness across all systems."""
        stmt = select(
            func.avg(AISystem.doc_completeness),
            func.avg(AISystem.training_completeness),
        )
        result = await self.session.execute(stmt)
        doc_avg, training_avg = result.one()
        return {
            "doc_completeness": float(doc_avg or 0),
            "training_completeness": float(training_avg or 0),
        }
