"""Compliance document entity model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Document(Base, table=True):
    """Technical documentation, policies and other compliance documents.

    Table: documents
    """

    __tablename__ = "documents"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    type: str = Field(max_length=64, index=True)
    system_id: Optional[str] = Field(default=None, max_length=64, index=True)
    content: Optional[str] = Field(default=None, sa_type=Text)
    version: str = Field(default="1.0", max_length=32)
    status: str = Field(default="draft", max_length=32, index=True)
    created_by: Optional[str] = Field(default=None, max_length=128)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
