"""
API keys repository implementation.

This module provides data access for stored third-party API keys.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.api_keys import ApiKey
from .base import SQLModelRepository


class ApiKeyRepository(SQLModelRepository[ApiKey]):
    """Repository for API key data access operations using SQLModel."""

    default_order = "id"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ApiKey)

    async def list_by_provider(self, provider: Optional[str] = None) -> List[ApiKey]:
        return await self.list(filters={"provider": provider} if provider else None)

    async def list_active(self, provider: Optional[str] = None) -> List[ApiKey]:
        stmt = select(ApiKey).where(ApiKey.is_active == True)  # noqa: E712
        if provider:
            stmt = stmt.where(ApiKey.provider == provider)
        return await self._all(stmt.order_by(ApiKey.id))  # type: ignore[arg-type]

    async def get_active_for_provider(self, provider: str) -> Optional[ApiKey]:
        """The least used active key of ``provider``."""
        stmt = (
            select(ApiKey)
            .where(ApiKey.provider == provider, ApiKey.is_active == True)  # noqa: E712
            .order_by(ApiKey.usage_count, ApiKey.id)  # type: ignore[arg-type]
        )
        return await self._first(stmt)

    async def record_usage(self, api_key: ApiKey) -> ApiKey:
        """Count one use of ``api_key``; deactivate it when its usage limit is reached."""
        api_key.usage_count += 1
        api_key.last_used = utc_now()
        if api_key.usage_limit is not None and api_key.usage_count >= api_key.usage_limit:
            api_key.is_active = False
        return await self.update(api_key)

    async def deactivate(self, api_key: ApiKey) -> ApiKey:
        api_key.is_active = False
        return await self.update(api_key)
