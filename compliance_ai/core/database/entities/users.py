"""
User entity models.

Users are the actors of the compliance workflows: they register AI systems,
submit items for approval, review them and complete training.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class User(Base, table=True):
    """Entity for application users.

    ``uid`` is the public identifier used by API callers (the ``X-User-Id``
    header, ``submitted_by``/``assigned_to`` columns); ``id`` stays internal.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    uid: str = Field(max_length=128, unique=True, index=True)
    username: str = Field(max_length=128)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: Optional[str] = Field(default=None, max_length=255)
    display_name: Optional[str] = Field(default=None, max_length=255)
    role: str = Field(default="user", max_length=32, index=True)
    department: Optional[str] = Field(default=None, max_length=128)
    photo_url: Optional[str] = Field(default=None, max_length=512)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"User(uid={self.uid}, email={self.email}, role={self.role})"
