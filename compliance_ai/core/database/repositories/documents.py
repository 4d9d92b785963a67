"""Documents repository implementation."""

from __future__ import annotations

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.documents import Document
from .base import SQLModelRepository


class DocumentRepository(SQLModelRepository[Document]):
    """Repository for compliance documents."""

    default_order = "id"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Document)

    async def list_by_system(self, system_id: str) -> List[Document]:
        stmt = select(Document).where(Document.system_id == system_id).order_by(Document.updated_at.desc())  # type: ignore[attr-defined]
        return await self._all(stmt)
