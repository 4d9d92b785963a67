"""Domain enums shared by entities, I/O models and services."""

from __future__ import annotations

from .enums import (
    ActivityType,
    AIProvider,
    ApprovalPriority,
    ApprovalStatus,
    Language,
    ModuleType,
    NotificationFrequency,
    NotificationType,
    RiskLevel,
    UserRole,
)

__all__ = [
    "ActivityType",
    "AIProvider",
    "ApprovalPriority",
    "ApprovalStatus",
    "Language",
    "ModuleType",
    "NotificationFrequency",
    "NotificationType",
    "RiskLevel",
    "UserRole",
]
