"""Regulatory terms repository implementation."""

from __future__ import annotations

from typing import List

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.regulatory_terms import RegulatoryTerm
from .base import SQLModelRepository


class RegulatoryTermRepository(SQLModelRepository[RegulatoryTerm]):
    """Repository for the regulatory glossary."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, RegulatoryTerm)

    async def list_by_language(self, language: str = "en") -> List[RegulatoryTerm]:
        stmt = select(RegulatoryTerm).where(RegulatoryTerm.language == language).order_by(RegulatoryTerm.term)
        return await self._all(stmt)

    async def search(self, term: str, language: str = "en") -> List[RegulatoryTerm]:
        """Case-insensitive term search; exact matches sort before partial ones."""
        lowered = term.lower()
        stmt = (
            select(RegulatoryTerm)
            .where(RegulatoryTerm.language == language, func.lower(RegulatoryTerm.term).contains(lowered))
            .order_by((func.lower(RegulatoryTerm.term) != lowered), RegulatoryTerm.term)
        )
        return await self._all(stmt)
