"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, for services that touch several tables.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .ai_systems import AISystemRepository
from .api_keys import ApiKeyRepository
from .approvals import (
    ApprovalAssignmentRepository,
    ApprovalHistoryRepository,
    ApprovalItemRepository,
    ApprovalNotificationRepository,
    ApprovalSettingsRepository,
)
from .departments import DepartmentRepository
from .documents import DocumentRepository
from .regulatory_terms import RegulatoryTermRepository
from .risk_assessments import RiskAssessmentRepository
from .tracking import ActivityRepository, AlertRepository, DeadlineRepository
from .training import TrainingModuleRepository, TrainingProgressRepository
from .users import UserRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    users: UserRepository
    systems: AISystemRepository
    departments: DepartmentRepository
    activities: ActivityRepository
    alerts: AlertRepository
    deadlines: DeadlineRepository
    documents: DocumentRepository
    risk_assessments: RiskAssessmentRepository
    training_modules: TrainingModuleRepository
    training_progress: TrainingProgressRepository
    approval_items: ApprovalItemRepository
    approval_assignments: ApprovalAssignmentRepository
    approval_history: ApprovalHistoryRepository
    notifications: ApprovalNotificationRepository
    approval_settings: ApprovalSettingsRepository
    api_keys: ApiKeyRepository
    regulatory_terms: RegulatoryTermRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        users=UserRepository(session),
        systems=AISystemRepository(session),
        departments=DepartmentRepository(session),
        activities=ActivityRepository(session),
        alerts=AlertRepository(session),
        deadlines=DeadlineRepository(session),
        documents=DocumentRepository(session),
        risk_assessments=RiskAssessmentRepository(session),
        training_modules=TrainingModuleRepository(session),
        training_progress=TrainingProgressRepository(session),
        approval_items=ApprovalItemRepository(session),
        approval_assignments=ApprovalAssignmentRepository(session),
        approval_history=ApprovalHistoryRepository(session),
        notifications=ApprovalNotificationRepository(session),
        approval_settings=ApprovalSettingsRepository(session),
        api_keys=ApiKeyRepository(session),
        regulatory_terms=RegulatoryTermRepository(session),
    )
