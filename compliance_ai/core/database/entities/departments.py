"""Department entity model."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import Base


class Department(Base, table=True):
    """Organisational unit with an aggregated compliance score.

    Table: departments
    """

    __tablename__ = "departments"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=128, unique=True, index=True)
    compliance_score: Optional[int] = Field(default=0)
