"""Regulatory glossary entity model."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Text

from ..base import Base, utc_now


class RegulatoryTerm(Base, table=True):
    """EU AI Act term with a localized definition, used for tooltips.

    Table: regulatory_terms
    """

    __tablename__ = "regulatory_terms"
    __table_args__ = (UniqueConstraint("term", "language", name="uq_regulatory_terms_term_language"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    term: str = Field(max_length=255, index=True)
    definition: str = Field(sa_type=Text)
    explanation: Optional[str] = Field(default=None, sa_type=Text)
    article_reference: Optional[str] = Field(default=None, max_length=128)
    category: Optional[str] = Field(default=None, max_length=64, index=True)
    language: str = Field(default="en", max_length=8, index=True)
    created_by: Optional[str] = Field(default=None, max_length=128)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
