"""Dashboard I/O models."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from .tracking import DepartmentRead


class DashboardSummary(BaseModel):
    """Aggregated compliance figures for the dashboard."""

    total_systems: int
    high_risk_systems: int
    doc_completeness: int = Field(description="Average documentation completeness, rounded")
    training_completeness: int = Field(description="Average training completeness, rounded")
    risk_distribution: Dict[str, int]
    department_compliance: List[DepartmentRead]
