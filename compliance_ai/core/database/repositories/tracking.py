"""
Compliance tracking repositories.

This module provides data access for the dashboard feed tables: the activity
log, alerts and deadlines.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.tracking import Activity, Alert, Deadline
from .base import SQLModelRepository


class ActivityRepository(SQLModelRepository[Activity]):
    """Repository for activity log entries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Activity)

    async def recent(self, limit: int = 5) -> List[Activity]:
        stmt = select(Activity).order_by(Activity.timestamp.desc(), Activity.id.desc()).limit(limit)  # type: ignore[attr-defined]
        return await self._all(stmt)

    async def log(
        self,
        type: str,
        description: str,
        *,
        user_id: Optional[str] = None,
        system_id: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> Activity:
        """Append an entry to the activity log."""
        return await self.create(
            Activity(type=type, description=description, user_id=user_id, system_id=system_id, details=details)
        )


class AlertRepository(SQLModelRepository[Alert]):
    """Repository for compliance alerts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Alert)

    async def critical(self, limit: int = 3) -> List[Alert]:
        """Unresolved critical alerts, newest first."""
        stmt = (
            select(Alert)
            .where(Alert.severity == "critical", Alert.is_resolved == False)  # noqa: E712
            .order_by(Alert.created_at.desc(), Alert.id.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return await self._all(stmt)

    async def resolve(self, alert: Alert) -> Alert:
        alert.is_resolved = True
        return await self.update(alert)


class DeadlineRepository(SQLModelRepository[Deadline]):
    """Repository for deadlines."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Deadline)

    async def upcoming(self, limit: int = 3) -> List[Deadline]:
        """Deadlines from now on, soonest first."""
        stmt = select(Deadline).where(Deadline.date >= utc_now()).order_by(Deadline.date).limit(limit)  # type: ignore[arg-type]
        return await self._all(stmt)
