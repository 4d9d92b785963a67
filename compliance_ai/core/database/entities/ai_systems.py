"""
AI system entity models.

An AI system is the unit of the compliance inventory: every assessment,
document, alert and registration approval refers to one by ``system_id``.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Field, Text

from ..base import Base, utc_now


class AISystem(Base, table=True):
    """Entity for registered AI systems.

    Table: ai_systems
    """

    __tablename__ = "ai_systems"

    id: Optional[int] = Field(default=None, primary_key=True)
    system_id: str = Field(max_length=64, unique=True, index=True)
    name: str = Field(max_length=255)
    vendor: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=128, index=True)

    # Risk classification
    risk_level: Optional[str] = Field(default=None, max_length=16, index=True)
    risk_score: Optional[int] = Field(default=None)

    # Lifecycle dates
    implementation_date: Optional[datetime] = Field(default=None)
    last_assessment_date: Optional[datetime] = Field(default=None)

    # Compliance progress (0-100)
    doc_completeness: Optional[int] = Field(default=0)
    training_completeness: Optional[int] = Field(default=0)

    description: Optional[str] = Field(default=None, sa_type=Text)
    status: str = Field(default="active", max_length=32, index=True)

    # Registration details
    purpose: Optional[str] = Field(default=None, sa_type=Text)
    version: Optional[str] = Field(default=None, max_length=64)
    ai_capabilities: Optional[str] = Field(default=None, sa_type=Text)
    training_datasets: Optional[str] = Field(default=None, sa_type=Text)
    usage_context: Optional[str] = Field(default=None, sa_type=Text)
    potential_impact: Optional[str] = Field(default=None, sa_type=Text)
    keywords: List[str] = Field(default_factory=list, sa_type=JSON)
    expected_lifetime: Optional[str] = Field(default=None, max_length=128)
    maintenance_schedule: Optional[str] = Field(default=None, max_length=255)
    deployment_scope: Optional[str] = Field(default=None, max_length=255)

    created_by: Optional[str] = Field(default=None, max_length=128)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"AISystem(system_id={self.system_id}, risk_level={self.risk_level}, status={self.status})"
