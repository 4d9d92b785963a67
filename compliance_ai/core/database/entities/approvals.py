"""
Approval workflow entity models.

This module spans the tables of the approval workflow: the submitted items,
their reviewer assignments, the audit history, in-app notifications and the
per-user workflow settings. All of them join on ``workflow_id`` or on user
``uid`` values.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import JSON, Field, Text

from ..base import Base, utc_now


class ApprovalItem(Base, table=True):
    """Item submitted for approval.

    Table: approval_items
    """

    __tablename__ = "approval_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    workflow_id: str = Field(max_length=64, unique=True, index=True)

    # What is being approved
    module_type: str = Field(max_length=32, index=True)
    module_id: str = Field(max_length=64, index=True)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)

    # Who submitted it
    submitted_by: str = Field(max_length=128, index=True)
    submitter_name: Optional[str] = Field(default=None, max_length=255)
    department: Optional[str] = Field(default=None, max_length=128)

    submitted_date: datetime = Field(default_factory=utc_now, index=True)
    due_date: Optional[datetime] = Field(default=None)
    status: str = Field(default="pending", max_length=16, index=True)
    priority: str = Field(default="medium", max_length=16, index=True)
    details: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    language: str = Field(default="en", max_length=8)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"ApprovalItem(workflow_id={self.workflow_id}, status={self.status}, priority={self.priority})"


class ApprovalAssignment(Base, table=True):
    """Reviewer assignment for an approval item.

    Table: approval_assignments
    """

    __tablename__ = "approval_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    workflow_id: str = Field(max_length=64, index=True)
    assigned_to: str = Field(max_length=128, index=True)
    assigned_by: str = Field(max_length=128)
    assigned_date: datetime = Field(default_factory=utc_now)
    due_date: Optional[datetime] = Field(default=None, index=True)
    is_auto_assigned: bool = Field(default=False)
    status: str = Field(default="pending", max_length=16, index=True)
    priority: str = Field(default="medium", max_length=16)
    comments: Optional[str] = Field(default=None, sa_type=Text)
    completed_date: Optional[datetime] = Field(default=None)


class ApprovalHistory(Base, table=True):
    """Audit trail entry for an approval item.

    Table: approval_history
    """

    __tablename__ = "approval_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    workflow_id: str = Field(max_length=64, index=True)
    action_type: str = Field(max_length=32)
    action_by: str = Field(max_length=128)
    action_by_name: Optional[str] = Field(default=None, max_length=255)
    action_date: datetime = Field(default_factory=utc_now, index=True)
    details: Optional[str] = Field(default=None, sa_type=Text)
    comments: Optional[str] = Field(default=None, sa_type=Text)
    previous_status: Optional[str] = Field(default=None, max_length=16)
    new_status: Optional[str] = Field(default=None, max_length=16)


class ApprovalNotification(Base, table=True):
    """In-app notification produced by the workflow.

    Table: approval_notifications
    """

    __tablename__ = "approval_notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    workflow_id: str = Field(max_length=64, index=True)
    user_id: str = Field(max_length=128, index=True)
    title: str = Field(max_length=255)
    message: str = Field(sa_type=Text)
    is_read: bool = Field(default=False, index=True)
    priority: str = Field(default="medium", max_length=16)
    type: str = Field(max_length=32)
    related_action: Optional[str] = Field(default=None, max_length=64)
    language: str = Field(default="en", max_length=8)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class ApprovalSettings(Base, table=True):
    """Per-user workflow preferences.

    Table: approval_settings
    """

    __tablename__ = "approval_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=128, unique=True, index=True)
    auto_assign_enabled: bool = Field(default=True)
    default_assignees: List[str] = Field(default_factory=list, sa_type=JSON)
    notification_frequency: str = Field(default="immediately", max_length=16)
    email_notifications_enabled: bool = Field(default=True)
    language: str = Field(default="en", max_length=8)
    department_rules: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    module_type_rules: Dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    updated_at: datetime = Field(default_factory=utc_now)
