"""
AI system I/O models for API requests and responses.

Registration forms send dates as free text and multi-select fields as lists;
the create/update schemas normalise both before they reach the entity.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from compliance_ai.core.models.domain import RiskLevel

LIST_TEXT_FIELDS = ("ai_capabilities", "training_datasets", "usage_context", "potential_impact", "deployment_scope")
DATE_FIELDS = ("implementation_date", "last_assessment_date")


def coerce_date(value: Any) -> Optional[datetime]:
    """Return ``value`` as a naive datetime, or None when it is empty or unparseable."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed.replace(tzinfo=None)
    return None


def join_list(value: Any) -> Any:
    """Join list values with ``", "``; other values pass through."""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if v is not None and str(v) != "")
    return value


class _SystemFields(BaseModel):
    vendor: Optional[str] = None
    department: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    risk_score: Optional[int] = Field(default=None, ge=0, le=100)
    implementation_date: Optional[datetime] = None
    last_assessment_date: Optional[datetime] = None
    doc_completeness: Optional[int] = Field(default=None, ge=0, le=100)
    training_completeness: Optional[int] = Field(default=None, ge=0, le=100)
    description: Optional[str] = None
    status: Optional[str] = None
    purpose: Optional[str] = None
    version: Optional[str] = None
    ai_capabilities: Optional[str] = None
    training_datasets: Optional[str] = None
    usage_context: Optional[str] = None
    potential_impact: Optional[str] = None
    keywords: Optional[List[str]] = None
    expected_lifetime: Optional[str] = None
    maintenance_schedule: Optional[str] = None
    deployment_scope: Optional[str] = None

    @field_validator(*DATE_FIELDS, mode="before")
    @classmethod
    def _coerce_dates(cls, value: Any) -> Optional[datetime]:
        return coerce_date(value)

    @field_validator(*LIST_TEXT_FIELDS, mode="before")
    @classmethod
    def _join_lists(cls, value: Any) -> Any:
        return join_list(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class AISystemCreate(_SystemFields):
    """Schema for registering an AI system."""

    system_id: Optional[str] = Field(default=None, description="Public identifier; generated when omitted")
    name: str = Field(min_length=1, description="System name")
    created_by: Optional[str] = None


class AISystemUpdate(_SystemFields):
    """Schema for updating an AI system. All fields are optional."""

    name: Optional[str] = None

    @field_validator("name", "status", "keywords")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Omitted fields keep their default and skip validation; only an explicit null lands here.
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value



class AISystemRead(BaseModel):
    """Schema for reading an AI system."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    system_id: str
    name: str
    vendor: Optional[str] = None
    department: Optional[str] = None
    risk_level: Optional[str] = None
    risk_score: Optional[int] = None
    implementation_date: Optional[datetime] = None
    last_assessment_date: Optional[datetime] = None
    doc_completeness: Optional[int] = None
    training_completeness: Optional[int] = None
    description: Optional[str] = None
    status: str
    purpose: Optional[str] = None
    version: Optional[str] = None
    ai_capabilities: Optional[str] = None
    training_datasets: Optional[str] = None
    usage_context: Optional[str] = None
    potential_impact: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    expected_lifetime: Optional[str] = None
    maintenance_schedule: Optional[str] = None
    deployment_scope: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
