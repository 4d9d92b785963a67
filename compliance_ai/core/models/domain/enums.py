"""Domain enums for the compliance models."""

from __future__ import annotations

from enum import Enum


class RiskLevel(str, Enum):
    """
    EU AI Act risk tier assigned to a registered AI system.

    The tier drives which obligations apply; it is a data attribute only.
    """

    unacceptable = "unacceptable"  # Prohibited practices.
    high = "high"  # Annex III systems with full conformity obligations.
    limited = "limited"  # Transparency obligations only.
    minimal = "minimal"  # No specific obligations.


class UserRole(str, Enum):
    """Roles recognised by the workflow permission checks and auto-assignment."""

    admin = "admin"
    compliance_officer = "compliance_officer"
    legal = "legal"
    technical = "technical"
    decision_maker = "decision_maker"
    operator = "operator"
    user = "user"


class ApprovalStatus(str, Enum):
    """Lifecycle status of an approval item."""

    pending = "pending"
    in_review = "in_review"
    approved = "approved"
    rejected = "rejected"
    cancelled = "cancelled"

    @property
    def is_final(self) -> bool:
        return self in (ApprovalStatus.approved, ApprovalStatus.rejected, ApprovalStatus.cancelled)


class ApprovalPriority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class ModuleType(str, Enum):
    """Kind of record an approval item refers to."""

    risk_assessment = "risk_assessment"
    system_registration = "system_registration"
    document = "document"
    training = "training"


class NotificationFrequency(str, Enum):
    immediately = "immediately"
    daily = "daily"
    weekly = "weekly"


class NotificationType(str, Enum):
    assignment = "assignment"
    status_change = "status_change"
    reminder = "reminder"
    completion = "completion"


class Language(str, Enum):
    en = "en"
    vi = "vi"
    de = "de"


class AIProvider(str, Enum):
    """Third-party providers whose API keys the application manages."""

    deepseek = "deepseek"
    gemini = "gemini"
    openai = "openai"
    anthropic = "anthropic"
    cohere = "cohere"
    stability = "stability"
    google_search = "google_search"


class ActivityType(str, Enum):
    """Activity log entry types written by the services."""

    system_created = "system_created"
    system_updated = "system_updated"
    risk_assessment = "risk_assessment"
    document_created = "document_created"
    training_completed = "training_completed"
    approval_submitted = "approval_submitted"
