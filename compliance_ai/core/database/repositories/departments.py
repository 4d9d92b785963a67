"""Departments repository implementation."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.departments import Department
from .base import SQLModelRepository


class DepartmentRepository(SQLModelRepository[Department]):
    """Repository for department data access operations using SQLModel."""

    default_order = "name"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Department)

    async def get_by_name(self, name: str) -> Optional[Department]:
        return await self._first(select(Department).where(Department.name == name))
