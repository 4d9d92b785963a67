"""Regulatory glossary I/O models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from compliance_ai.core.models.domain import Language


class RegulatoryTermCreate(BaseModel):
    term: str = Field(min_length=1)
    definition: str = Field(min_length=1)
    explanation: Optional[str] = None
    article_reference: Optional[str] = Field(default=None, examples=["Article 3(1)"])
    category: Optional[str] = None
    language: Language = Language.en


class RegulatoryTermUpdate(BaseModel):
    term: Optional[str] = None
    definition: Optional[str] = None
    explanation: Optional[str] = None
    article_reference: Optional[str] = None
    category: Optional[str] = None
    language: Optional[Language] = None


class RegulatoryTermRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    term: str
    definition: str
    explanation: Optional[str] = None
    article_reference: Optional[str] = None
    category: Optional[str] = None
    language: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
