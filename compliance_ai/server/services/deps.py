"""
Request dependencies.

Provides the repository bundle, the domain services and the acting user to
the API endpoints.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from compliance_ai.core.database import get_session
from compliance_ai.core.database.entities import User
from compliance_ai.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from compliance_ai.core.errors import AuthorizationError
from compliance_ai.core.models.domain import UserRole
from compliance_ai.server.core import constant

from .approval_workflow import ApprovalWorkflowService
from .dashboard import DashboardService
from .risk_assessments import RiskAssessmentService
from .systems import AISystemService
from .training import TrainingService
from .users import UserService

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]


def get_user_service(repos: ReposDep) -> UserService:
    return UserService(repos)


def get_system_service(repos: ReposDep) -> AISystemService:
    return AISystemService(repos)


def get_risk_assessment_service(repos: ReposDep) -> RiskAssessmentService:
    return RiskAssessmentService(repos)


def get_dashboard_service(repos: ReposDep) -> DashboardService:
    return DashboardService(repos)


def get_training_service(repos: ReposDep) -> TrainingService:
    return TrainingService(repos)


def get_approval_service(repos: ReposDep) -> ApprovalWorkflowService:
    return ApprovalWorkflowService(repos)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
SystemServiceDep = Annotated[AISystemService, Depends(get_system_service)]
RiskAssessmentServiceDep = Annotated[RiskAssessmentService, Depends(get_risk_assessment_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
TrainingServiceDep = Annotated[TrainingService, Depends(get_training_service)]
ApprovalServiceDep = Annotated[ApprovalWorkflowService, Depends(get_approval_service)]


async def get_current_user(
    users: UserServiceDep,
    x_user_id: Annotated[Optional[str], Header(alias=constant.USER_ID_HEADER)] = None,
) -> User:
    """The acting user, identified by the ``X-User-Id`` header."""
    return await users.resolve(x_user_id)


async def get_optional_user(
    users: UserServiceDep,
    x_user_id: Annotated[Optional[str], Header(alias=constant.USER_ID_HEADER)] = None,
) -> Optional[User]:
    if not x_user_id:
        return None
    return await users.repos.users.get_by_uid(x_user_id)


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    if (user.role or "").lower() != UserRole.admin.value:
        raise AuthorizationError("Admin role required")
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[Optional[User], Depends(get_optional_user)]
AdminUserDep = Annotated[User, Depends(require_admin)]
