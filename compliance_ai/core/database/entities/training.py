"""
Training entity models.

This module contains the AI literacy training modules and the per-user
progress records, which also carry the completion certificate.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field, Text

from ..base import Base, utc_now


class TrainingModule(Base, table=True):
    """Training module definition.

    ``content`` holds the slides, document, exercises and assessments.

    Table: training_modules
    """

    __tablename__ = "training_modules"

    id: Optional[int] = Field(default=None, primary_key=True)
    module_id: str = Field(max_length=64, unique=True, index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    estimated_time: Optional[str] = Field(default=None, max_length=64)
    topics: List[str] = Field(default_factory=list, sa_type=JSON)
    role_relevance: Dict[str, str] = Field(default_factory=dict, sa_type=JSON)
    content: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    order: int = Field(default=0)
    status: str = Field(default="active", max_length=32)


class TrainingProgress(Base, table=True):
    """User progress on a training module.

    Table: training_progress
    """

    __tablename__ = "training_progress"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=128, index=True)
    module_id: str = Field(max_length=64, index=True)
    completion: int = Field(default=0)
    assessment_score: Optional[int] = Field(default=None)
    last_attempt_date: datetime = Field(default_factory=utc_now)
    certificate_id: Optional[str] = Field(default=None, max_length=64, unique=True, index=True)
    completed_at: Optional[datetime] = Field(default=None)
