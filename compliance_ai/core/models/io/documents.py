"""Document I/O models for API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentCreate(BaseModel):
    title: str = Field(min_length=1)
    type: str = Field(description="Document type, e.g. technical_documentation, risk_management_plan")
    system_id: Optional[str] = None
    content: Optional[str] = None
    version: str = "1.0"
    status: str = "draft"
    created_by: Optional[str] = None


class DocumentUpdate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    content: Optional[str] = None
    version: Optional[str] = None
    status: Optional[str] = None


class DocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    type: str
    system_id: Optional[str] = None
    content: Optional[str] = None
    version: str
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime
