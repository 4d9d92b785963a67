"""
User I/O models for API requests and responses.

The password hash never leaves the server: ``UserRead`` has no password field.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """Schema for registering a user."""

    email: str = Field(description="Unique e-mail address", examples=["jane@example.com"])
    password: str = Field(min_length=6, description="Plain text password; stored hashed")
    username: Optional[str] = Field(default=None, description="Login name; defaults to the e-mail local part")
    display_name: Optional[str] = None
    uid: Optional[str] = Field(default=None, description="External identifier; generated when omitted")
    role: str = Field(default="user", description="User role (admin, compliance_officer, legal, ...)")
    department: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for logging in."""

    email: str
    password: str


class UserRead(BaseModel):
    """Schema for reading a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    uid: str
    username: str
    email: str
    display_name: Optional[str] = None
    role: str
    department: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: datetime
