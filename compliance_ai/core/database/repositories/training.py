"""
Training repositories.

This module provides data access for training modules and user progress.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.training import TrainingModule, TrainingProgress
from .base import SQLModelRepository


class TrainingModuleRepository(SQLModelRepository[TrainingModule]):
    """Repository for training module definitions."""

    default_order = "order"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TrainingModule)

    async def get_by_module_id(self, module_id: str) -> Optional[TrainingModule]:
        return await self._first(select(TrainingModule).where(TrainingModule.module_id == module_id))


class TrainingProgressRepository(SQLModelRepository[TrainingProgress]):
    """Repository for per-user training progress."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TrainingProgress)

    async def get_for_user_module(self, user_id: str, module_id: str) -> Optional[TrainingProgress]:
        stmt = select(TrainingProgress).where(
            TrainingProgress.user_id == user_id, TrainingProgress.module_id == module_id
        )
        return await self._first(stmt)

    async def list_by_user(self, user_id: str) -> List[TrainingProgress]:
        stmt = select(TrainingProgress).where(TrainingProgress.user_id == user_id).order_by(TrainingProgress.module_id)
        return await self._all(stmt)

    async def get_by_certificate_id(self, certificate_id: str) -> Optional[TrainingProgress]:
        return await self._first(select(TrainingProgress).where(TrainingProgress.certificate_id == certificate_id))
