"""
API key I/O models.

Read models never carry the raw key; only ``masked_key`` is exposed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from compliance_ai.core.models.domain import AIProvider
from compliance_ai.core.security import mask_secret


class ApiKeyCreate(BaseModel):
    provider: AIProvider
    key: str = Field(min_length=1)
    description: Optional[str] = None
    is_active: bool = True
    usage_limit: Optional[int] = Field(default=None, ge=1)


class ApiKeyUpdate(BaseModel):
    """Schema for updating a stored key. An empty ``key`` is rejected by the endpoint."""

    key: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    usage_limit: Optional[int] = Field(default=None, ge=1)


class ApiKeyRead(BaseModel):
    id: int
    provider: str
    masked_key: str
    description: Optional[str] = None
    is_active: bool
    usage_limit: Optional[int] = None
    usage_count: int
    last_used: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, api_key) -> "ApiKeyRead":
        return cls(
            id=api_key.id,
            provider=api_key.provider,
            masked_key=mask_secret(api_key.key),
            description=api_key.description,
            is_active=api_key.is_active,
            usage_limit=api_key.usage_limit,
            usage_count=api_key.usage_count,
            last_used=api_key.last_used,
            created_at=api_key.created_at,
            updated_at=api_key.updated_at,
        )


class ApiKeyTestResult(BaseModel):
    provider: str
    success: bool
    message: str
    masked_key: Optional[str] = None
