"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships. Each module represents either:

1. A single database table and its related logic
2. A business domain that spans multiple related tables

Modules:
- users: Application users and roles
- ai_systems: Registered AI system inventory
- departments: Organisational units and compliance scores
- tracking: Activity log, alerts and deadlines
- documents: Compliance documents
- risk_assessments: EU AI Act risk assessments
- training: Training modules and user progress
- approvals: Approval workflow items, assignments, history, notifications, settings
- api_keys: Third-party provider API keys
- regulatory_terms: Localized regulatory glossary
"""

from .ai_systems import AISystem
from .api_keys import ApiKey
from .approvals import (
    ApprovalAssignment,
    ApprovalHistory,
    ApprovalItem,
    ApprovalNotification,
    ApprovalSettings,
)
from .departments import Department
from .documents import Document
from .regulatory_terms import RegulatoryTerm
from .risk_assessments import RiskAssessment
from .tracking import Activity, Alert, Deadline
from .training import TrainingModule, TrainingProgress
from .users import User

__all__ = [
    "AISystem",
    "Activity",
    "Alert",
    "ApiKey",
    "ApprovalAssignment",
    "ApprovalHistory",
    "ApprovalItem",
    "ApprovalNotification",
    "ApprovalSettings",
    "Deadline",
    "Department",
    "Document",
    "RegulatoryTerm",
    "RiskAssessment",
    "TrainingModule",
    "TrainingProgress",
    "User",
]
