"""
Repository base classes and query helpers.

``SQLModelRepository`` implements CRUD, partial updates and counting for one
SQLModel table on an ``AsyncSession``; ``QueryBuilder`` and ``total_pages``
back the filtered, paginated listings of the API.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Async CRUD interface over one SQLModel table."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Persist ``entity`` and return it with generated fields populated."""

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Primary-key lookup; None when absent."""

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType: ...

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete by primary key; False when nothing was deleted."""

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """Rows matching the equality ``filters``, paginated by ``limit``/``offset``."""


class SQLModelRepository(AsyncBaseRepository[EntityType]):
    """Concrete CRUD implementation shared by the table repositories.

    Entities with an ``updated_at`` column get it refreshed on ``update``.
    Subclasses add their table-specific queries.
    """

    default_order: Optional[str] = None

    async def create(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType) -> EntityType:
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        if self.default_order:
            stmt = stmt.order_by(getattr(self.model, self.default_order))
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        return await self._all(stmt)

    async def update_fields(self, entity: EntityType, values: Dict[str, Any]) -> EntityType:
        """Apply a partial update (``model_dump(exclude_unset=True)`` output) and persist it."""
        for key, value in values.items():
            setattr(entity, key, value)
        return await self.update(entity)

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_by(self, column: str) -> Dict[str, int]:
        """Group row counts by the values of ``column``."""
        col = getattr(self.model, column)
        result = await self.session.execute(select(col, func.count()).group_by(col))
        return {str(value): int(total) for value, total in result.all() if value is not None}

    async def _all(self, stmt) -> List[EntityType]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _first(self, stmt) -> Optional[EntityType]:
        result = await self.session.execute(stmt)
        return result.scalars().first()


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters; ``None`` values are skipped

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

    @staticmethod
    def page_to_offset(page: int, limit: int) -> int:
        """Translate a 1-based page number into a row offset."""
        return max(page - 1, 0) * limit


def total_pages(total_items: int, limit: int) -> int:
    """Number of pages needed for ``total_items`` at ``limit`` per page."""
    if limit <= 0:
        return 0
    return (total_items + limit - 1) // limit


