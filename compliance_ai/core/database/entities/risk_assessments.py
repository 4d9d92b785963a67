"""
Risk assessment entity models.

A risk assessment classifies a system against the EU AI Act tiers and
records the articles, gaps and remediation actions behind the result.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from sqlmodel import JSON, Field, Text

from ..base import Base, utc_now


class RiskAssessment(Base, table=True):
    """Entity for system risk assessments.

    Table: risk_assessments
    """

    __tablename__ = "risk_assessments"

    id: Optional[int] = Field(default=None, primary_key=True)
    assessment_id: str = Field(max_length=64, unique=True, index=True)
    system_id: str = Field(max_length=64, index=True)
    assessment_date: datetime = Field(default_factory=utc_now)
    status: str = Field(default="draft", max_length=32, index=True)
    risk_level: str = Field(max_length=16)
    risk_score: Optional[int] = Field(default=None)
    system_category: Optional[str] = Field(default=None, max_length=128)

    # Structured findings
    prohibited_use_checks: List[Any] = Field(default_factory=list, sa_type=JSON)
    eu_ai_act_articles: List[Any] = Field(default_factory=list, sa_type=JSON)
    compliance_gaps: List[Any] = Field(default_factory=list, sa_type=JSON)
    remediation_actions: List[Any] = Field(default_factory=list, sa_type=JSON)
    evidence_documents: List[Any] = Field(default_factory=list, sa_type=JSON)

    summary_notes: Optional[str] = Field(default=None, sa_type=Text)
    created_by: Optional[str] = Field(default=None, max_length=128)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"RiskAssessment(assessment_id={self.assessment_id}, system_id={self.system_id}, risk_level={self.risk_level})"
