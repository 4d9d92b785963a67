"""
Training I/O models.

Covers the module catalogue, per-user progress and completion certificates.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrainingModuleRead(BaseModel):
    """Schema for reading a full training module, content included."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    module_id: str
    title: str
    description: Optional[str] = None
    estimated_time: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    role_relevance: Dict[str, str] = Field(default_factory=dict)
    content: Dict[str, Any] = Field(default_factory=dict)
    order: int = 0
    status: str = "active"


class TrainingModuleMetadata(BaseModel):
    """A training module without its content."""

    model_config = ConfigDict(from_attributes=True)

    module_id: str
    title: str
    description: Optional[str] = None
    estimated_time: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    role_relevance: Dict[str, str] = Field(default_factory=dict)
    order: int = 0
    status: str = "active"


class TrainingProgressUpdate(BaseModel):
    """Schema for recording progress; completion is clamped to 0-100."""

    user_id: str
    module_id: str
    completion: int = 0
    assessment_score: Optional[int] = None


class TrainingComplete(BaseModel):
    user_id: str
    module_id: str
    assessment_score: Optional[int] = None


class TrainingProgressRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    module_id: str
    completion: int
    assessment_score: Optional[int] = None
    last_attempt_date: datetime
    certificate_id: Optional[str] = None
    completed_at: Optional[datetime] = None


class CertificateRead(BaseModel):
    """Completion certificate issued for a finished module."""

    certificate_id: str
    user_id: str
    module_id: str
    module_title: Optional[str] = None
    assessment_score: Optional[int] = None
    completed_at: Optional[datetime] = None
