"""
I/O models for the dashboard feed: departments, activities, alerts and deadlines.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class DepartmentCreate(BaseModel):
    name: str = Field(min_length=1)
    compliance_score: int = Field(default=0, ge=0, le=100)


class DepartmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    compliance_score: Optional[int] = None


class ActivityCreate(BaseModel):
    """Schema for appending to the activity log."""

    type: str
    description: str
    user_id: Optional[str] = None
    system_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = Field(default=None, description="Free-form metadata")


class ActivityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    description: str
    user_id: Optional[str] = None
    system_id: Optional[str] = None
    timestamp: datetime
    details: Optional[Dict[str, Any]] = None


class AlertCreate(BaseModel):
    type: str
    severity: str = Field(description="critical, high, medium or low", examples=["critical"])
    title: str
    description: Optional[str] = None
    system_id: Optional[str] = None


class AlertRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    severity: str
    title: str
    description: Optional[str] = None
    system_id: Optional[str] = None
    created_at: datetime
    is_resolved: bool


class DeadlineCreate(BaseModel):
    title: str
    description: Optional[str] = None
    date: datetime
    type: str
    related_system_id: Optional[str] = None


class DeadlineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    date: datetime
    type: str
    related_system_id: Optional[str] = None
