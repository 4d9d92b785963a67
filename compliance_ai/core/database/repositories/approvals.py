"""
Approval workflow repositories.

This module provides data access operations for approval items and the
tables hanging off them (assignments, history, notifications) plus the
per-user workflow settings.
Built exclusively on SQLModel for type-safe ORM operations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.approvals import (
    ApprovalAssignment,
    ApprovalHistory,
    ApprovalItem,
    ApprovalNotification,
    ApprovalSettings,
)
from .base import QueryBuilder, SQLModelRepository

# Columns an approval listing may be sorted by.
SORTABLE_COLUMNS = ("submitted_date", "due_date", "priority", "status", "name", "module_type", "created_at")


class ApprovalItemRepository(SQLModelRepository[ApprovalItem]):
    """Repository for approval items."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApprovalItem)

    async def get_by_workflow_id(self, workflow_id: str) -> Optional[ApprovalItem]:
        return await self._first(select(ApprovalItem).where(ApprovalItem.workflow_id == workflow_id))

    async def search(
        self,
        *,
        filters: Optional[Dict[str, Any]] = None,
        search: Optional[str] = None,
        sort_by: str = "submitted_date",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[ApprovalItem], int]:
        """List approval items with filters, free-text search and sorting.

        Args:
            filters: Equality filters (status, module_type, priority, ...)
            search: Case-insensitive substring matched against name,
                description and submitter name
            sort_by: One of ``SORTABLE_COLUMNS``; anything else falls back to
                ``submitted_date``
            sort_order: ``asc`` or ``desc``
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of the page of items and the total number of matching rows
        """
        stmt = select(ApprovalItem)
        count_stmt = select(func.count()).select_from(ApprovalItem)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, ApprovalItem, filters)
            count_stmt = QueryBuilder.apply_filters(count_stmt, ApprovalItem, filters)
        if search:
            pattern = f"%{search}%"
            condition = or_(
                ApprovalItem.name.ilike(pattern),  # type: ignore[attr-defined]
                ApprovalItem.description.ilike(pattern),  # type: ignore[union-attr]
                ApprovalItem.submitter_name.ilike(pattern),  # type: ignore[union-attr]
            )
            stmt = stmt.where(condition)
            count_stmt = count_stmt.where(condition)

        column = getattr(ApprovalItem, sort_by if sort_by in SORTABLE_COLUMNS else "submitted_date")
        stmt = stmt.order_by(column.asc() if sort_order.lower() == "asc" else column.desc(), ApprovalItem.id)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        total = (await self.session.execute(count_stmt)).scalar_one()
        return await self._all(stmt), int(total)

    async def count_submitted_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(ApprovalItem).where(ApprovalItem.submitted_date >= since)
        return int((await self.session.execute(stmt)).scalar_one())


class ApprovalAssignmentRepository(SQLModelRepository[ApprovalAssignment]):
    """Repository for reviewer assignments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApprovalAssignment)

    async def list_by_workflow(self, workflow_id: str) -> List[ApprovalAssignment]:
        stmt = (
            select(ApprovalAssignment)
            .where(ApprovalAssignment.workflow_id == workflow_id)
            .order_by(ApprovalAssignment.assigned_date.desc(), ApprovalAssignment.id.desc())  # type: ignore[attr-defined]
        )
        return await self._all(stmt)

    async def get_open_for_workflow(self, workflow_id: str) -> Optional[ApprovalAssignment]:
        """The most recent assignment of the item that is not completed yet."""
        stmt = (
            select(ApprovalAssignment)
            .where(
                ApprovalAssignment.workflow_id == workflow_id,
                ApprovalAssignment.status.in_(("pending", "in_review")),  # type: ignore[attr-defined]
            )
            .order_by(ApprovalAssignment.assigned_date.desc(), ApprovalAssignment.id.desc())  # type: ignore[attr-defined]
        )
        return await self._first(stmt)

    async def list_pending_due_before(self, deadline: datetime) -> List[ApprovalAssignment]:
        stmt = select(ApprovalAssignment).where(
            ApprovalAssignment.status == "pending",
            ApprovalAssignment.due_date.is_not(None),  # type: ignore[union-attr]
            ApprovalAssignment.due_date <= deadline,  # type: ignore[operator]
        )
        return await self._all(stmt)

    async def count_open_due_between(self, start: datetime, deadline: datetime) -> int:
        """Open assignments due after ``start`` and no later than ``deadline``."""
        stmt = (
            select(func.count())
            .select_from(ApprovalAssignment)
            .where(
                ApprovalAssignment.status.in_(("pending", "in_review")),  # type: ignore[attr-defined]
                ApprovalAssignment.due_date.is_not(None),  # type: ignore[union-attr]
                ApprovalAssignment.due_date > start,  # type: ignore[operator]
                ApprovalAssignment.due_date <= deadline,  # type: ignore[operator]
            )
        )
        return int((await self.session.execute(stmt)).scalar_one())


class ApprovalHistoryRepository(SQLModelRepository[ApprovalHistory]):
    """Repository for the approval audit trail."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApprovalHistory)

    async def list_by_workflow(self, workflow_id: str) -> List[ApprovalHistory]:
        stmt = (
            select(ApprovalHistory)
            .where(ApprovalHistory.workflow_id == workflow_id)
            .order_by(ApprovalHistory.action_date.desc(), ApprovalHistory.id.desc())  # type: ignore[attr-defined]
        )
        return await self._all(stmt)

    async def list_by_new_status(self, new_status: str) -> List[ApprovalHistory]:
        return await self._all(select(ApprovalHistory).where(ApprovalHistory.new_status == new_status))


class ApprovalNotificationRepository(SQLModelRepository[ApprovalNotification]):
    """Repository for workflow notifications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApprovalNotification)

    async def list_for_user(
        self, user_id: str, *, unread_only: bool = False, limit: int = 10, offset: int = 0
    ) -> Tuple[List[ApprovalNotification], int]:
        conditions = [ApprovalNotification.user_id == user_id]
        if unread_only:
            conditions.append(ApprovalNotification.is_read == False)  # noqa: E712
        stmt = (
            select(ApprovalNotification)
            .where(*conditions)
            .order_by(ApprovalNotification.created_at.desc(), ApprovalNotification.id.desc())  # type: ignore[attr-defined]
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        count_stmt = select(func.count()).select_from(ApprovalNotification).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()
        return await self._all(stmt), int(total)

    async def count_unread(self, user_id: str) -> int:
        return await self.count(filters={"user_id": user_id, "is_read": False})

    async def mark_read(self, user_id: str, notification_ids: List[int]) -> int:
        """Mark the given notifications of ``user_id`` as read.

        Notifications belonging to other users are left untouched.

        Returns:
            Number of rows updated
        """
        stmt = (
            update(ApprovalNotification)
            .where(
                ApprovalNotification.user_id == user_id,
                ApprovalNotification.id.in_(notification_ids),  # type: ignore[union-attr]
            )
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)


class ApprovalSettingsRepository(SQLModelRepository[ApprovalSettings]):
    """Repository for per-user workflow settings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApprovalSettings)

    async def get_by_user(self, user_id: str) -> Optional[ApprovalSettings]:
        return await self._first(select(ApprovalSettings).where(ApprovalSettings.user_id == user_id))
