"""
API key entity model.

Keys stored here are managed through the ``/ai-keys`` endpoints and checked
by the ``check_ai_keys`` script; environment keys are handled separately by
the in-process API key manager.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class ApiKey(Base, table=True):
    """Third-party provider API key.

    A key whose ``usage_count`` reaches ``usage_limit`` is deactivated.

    Table: api_keys
    """

    __tablename__ = "api_keys"

    id: Optional[int] = Field(default=None, primary_key=True)
    provider: str = Field(max_length=32, index=True)
    key: str = Field(sa_type=Text)
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True, index=True)
    usage_limit: Optional[int] = Field(default=None)
    usage_count: int = Field(default=0)
    last_used: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        # Never render the key itself.
        return f"ApiKey(id={self.id}, provider={self.provider}, is_active={self.is_active})"
