"""
Approval workflow I/O models for API requests and responses.

This module groups the request bodies of the workflow endpoints, the read
models of the workflow tables and the paginated list envelopes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from compliance_ai.core.models.domain import (
    ApprovalPriority,
    ApprovalStatus,
    Language,
    ModuleType,
    NotificationFrequency,
)

T = TypeVar("T")


# ============================================================================
# Requests
# ============================================================================


class ApprovalItemCreate(BaseModel):
    """Schema for submitting an item for approval."""

    module_type: ModuleType = Field(description="Kind of record being submitted")
    module_id: str = Field(description="Identifier of the record in its own module")
    name: str = Field(min_length=1)
    description: Optional[str] = None
    department: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: ApprovalPriority = ApprovalPriority.medium
    details: Dict[str, Any] = Field(default_factory=dict)
    language: Language = Language.en


class ApprovalStatusUpdate(BaseModel):
    status: ApprovalStatus
    comments: Optional[str] = None


class ApprovalAssign(BaseModel):
    assigned_to: str = Field(description="uid of the reviewer")
    due_date: Optional[datetime] = None
    comments: Optional[str] = None


class MarkReadRequest(BaseModel):
    notification_ids: List[int] = Field(default_factory=list)


class ApprovalSettingsUpdate(BaseModel):
    """Schema for upserting workflow settings. All fields are optional."""

    auto_assign_enabled: Optional[bool] = None
    default_assignees: Optional[List[str]] = None
    notification_frequency: Optional[NotificationFrequency] = None
    email_notifications_enabled: Optional[bool] = None
    language: Optional[Language] = None
    department_rules: Optional[Dict[str, Any]] = None
    module_type_rules: Optional[Dict[str, Any]] = None


# ============================================================================
# Responses
# ============================================================================


class ApprovalItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workflow_id: str
    module_type: str
    module_id: str
    name: str
    description: Optional[str] = None
    submitted_by: str
    submitter_name: Optional[str] = None
    department: Optional[str] = None
    submitted_date: datetime
    due_date: Optional[datetime] = None
    status: str
    priority: str
    details: Dict[str, Any] = Field(default_factory=dict)
    language: str
    created_at: datetime
    updated_at: datetime


class ApprovalAssignmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workflow_id: str
    assigned_to: str
    assigned_by: str
    assigned_date: datetime
    due_date: Optional[datetime] = None
    is_auto_assigned: bool
    status: str
    priority: str
    comments: Optional[str] = None
    completed_date: Optional[datetime] = None


class ApprovalHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workflow_id: str
    action_type: str
    action_by: str
    action_by_name: Optional[str] = None
    action_date: datetime
    details: Optional[str] = None
    comments: Optional[str] = None
    previous_status: Optional[str] = None
    new_status: Optional[str] = None


class ApprovalNotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workflow_id: str
    user_id: str
    title: str
    message: str
    is_read: bool
    priority: str
    type: str
    related_action: Optional[str] = None
    language: str
    created_at: datetime


class ApprovalSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    auto_assign_enabled: bool
    default_assignees: List[str] = Field(default_factory=list)
    notification_frequency: str
    email_notifications_enabled: bool
    language: str
    department_rules: Dict[str, Any] = Field(default_factory=dict)
    module_type_rules: Dict[str, Any] = Field(default_factory=dict)
    updated_at: datetime


class ApprovalCreated(BaseModel):
    """Result of a submission: the item and whether a reviewer was auto-assigned."""

    item: ApprovalItemRead
    is_auto_assigned: bool


class ApprovalDetail(BaseModel):
    item: ApprovalItemRead
    assignments: List[ApprovalAssignmentRead]
    history: List[ApprovalHistoryRead]


class Pagination(BaseModel):
    page: int
    limit: int
    total_items: int
    total_pages: int


class Page(BaseModel, Generic[T]):
    """Paginated list envelope."""

    items: List[T]
    pagination: Pagination


class UnreadCount(BaseModel):
    unread_count: int


class MarkReadResult(BaseModel):
    updated: int


class ReminderResult(BaseModel):
    reminders_sent: int


class ApprovalStatistics(BaseModel):
    """Workflow statistics for the approval dashboard."""

    by_status: Dict[str, int]
    by_module_type: Dict[str, int]
    by_priority: Dict[str, int]
    recent_submissions: int = Field(description="Items submitted in the last 30 days")
    upcoming_deadlines: int = Field(description="Open assignments due within 2 days")
    average_approval_hours: float = Field(default=0.0, description="Mean submitted-to-approved time")
