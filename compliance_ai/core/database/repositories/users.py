"""
Users repository implementation.

This module provides data access operations for application users,
including the role lookups used by approval auto-assignment.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import User
from .base import SQLModelRepository


class UserRepository(SQLModelRepository[User]):
    """Repository for user data access operations using SQLModel."""

    default_order = "id"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_uid(self, uid: str) -> Optional[User]:
        return await self._first(select(User).where(User.uid == uid))

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._first(select(User).where(User.email == email))

    async def list_by_role(self, role: str, limit: Optional[int] = None) -> List[User]:
        """List users holding ``role``, oldest accounts first.

        Args:
            role: Role name (see ``UserRole``)
            limit: Maximum number of users to return

        Returns:
            List of User instances
        """
        stmt = select(User).where(User.role == role).order_by(User.id)  # type: ignore[arg-type]
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._all(stmt)

    async def list_by_uids(self, uids: List[str]) -> List[User]:
        if not uids:
            return []
        return await self._all(select(User).where(User.uid.in_(uids)))  # type: ignore[attr-defined]
