"""
Compliance tracking entity models.

This module groups the dashboard feed tables: the activity log, alerts
raised against systems, and upcoming regulatory deadlines.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Column, Field, Text

from ..base import Base, utc_now


class Activity(Base, table=True):
    """Activity log entry.

    ``details`` is stored in the ``metadata`` column; the attribute name
    differs because ``metadata`` is reserved on declarative models.

    Table: activities
    """

    __tablename__ = "activities"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(max_length=64, index=True)
    description: str = Field(sa_type=Text)
    user_id: Optional[str] = Field(default=None, max_length=128, index=True)
    system_id: Optional[str] = Field(default=None, max_length=64, index=True)
    timestamp: datetime = Field(default_factory=utc_now, index=True)
    details: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column("metadata", JSON, nullable=True))


class Alert(Base, table=True):
    """Compliance alert raised against a system.

    Table: alerts
    """

    __tablename__ = "alerts"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(max_length=64)
    severity: str = Field(max_length=16, index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    system_id: Optional[str] = Field(default=None, max_length=64, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    is_resolved: bool = Field(default=False, index=True)


class Deadline(Base, table=True):
    """Regulatory or internal deadline.

    Table: deadlines
    """

    __tablename__ = "deadlines"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    date: datetime = Field(index=True)
    type: str = Field(max_length=64)
    related_system_id: Optional[str] = Field(default=None, max_length=64)
