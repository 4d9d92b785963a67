"""Risk assessment I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from compliance_ai.core.models.domain import RiskLevel

from .systems import AISystemRead


class RiskAssessmentCreate(BaseModel):
    """Schema for recording a risk assessment of a registered system."""

    system_id: str = Field(description="Public identifier of the assessed system")
    assessment_id: Optional[str] = Field(default=None, description="Generated when omitted")
    assessment_date: Optional[datetime] = None
    status: str = "draft"
    risk_level: RiskLevel
    risk_score: Optional[int] = Field(default=None, ge=0, le=100)
    system_category: Optional[str] = None
    prohibited_use_checks: List[Any] = Field(default_factory=list)
    eu_ai_act_articles: List[Any] = Field(default_factory=list)
    compliance_gaps: List[Any] = Field(default_factory=list)
    remediation_actions: List[Any] = Field(default_factory=list)
    evidence_documents: List[Any] = Field(default_factory=list)
    summary_notes: Optional[str] = None
    created_by: Optional[str] = None


class RiskAssessmentUpdate(BaseModel):
    status: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    risk_score: Optional[int] = Field(default=None, ge=0, le=100)
    system_category: Optional[str] = None
    prohibited_use_checks: Optional[List[Any]] = None
    eu_ai_act_articles: Optional[List[Any]] = None
    compliance_gaps: Optional[List[Any]] = None
    remediation_actions: Optional[List[Any]] = None
    evidence_documents: Optional[List[Any]] = None
    summary_notes: Optional[str] = None


class RiskAssessmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    assessment_id: str
    system_id: str
    assessment_date: datetime
    status: str
    risk_level: str
    risk_score: Optional[int] = None
    system_category: Optional[str] = None
    prohibited_use_checks: List[Any] = Field(default_factory=list)
    eu_ai_act_articles: List[Any] = Field(default_factory=list)
    compliance_gaps: List[Any] = Field(default_factory=list)
    remediation_actions: List[Any] = Field(default_factory=list)
    evidence_documents: List[Any] = Field(default_factory=list)
    summary_notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SystemWithAssessments(BaseModel):
    """A registered system together with its assessments, newest first."""

    system: AISystemRead
    assessments: List[RiskAssessmentRead]
