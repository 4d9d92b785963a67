"""Dashboard aggregation."""

from __future__ import annotations

from typing import Any, Dict

from compliance_ai.core.database.repositories import SqlRepoBundle
from compliance_ai.core.models.domain import RiskLevel


class DashboardService:
    def __init__(self, repos: SqlRepoBundle):
        self.repos = repos

    async def summary(self) -> Dict[str, Any]:
        """Totals, rounded completeness averages, risk distribution and departments."""
        counts = await self.repos.systems.count_by_risk_level()
        averages = await self.repos.systems.average_completeness()
        return {
            "total_systems": await self.repos.systems.count(),
            "high_risk_systems": counts.get(RiskLevel.high.value, 0),
            "doc_completeness": round(averages["doc_completeness"]),
            "training_completeness": round(averages["training_completeness"]),
            "risk_distribution": {level.value: counts.get(level.value, 0) for level in RiskLevel},
            "department_compliance": await self.repos.departments.list(),
        }
