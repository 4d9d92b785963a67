"""
AI generation and search I/O models.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Schema for a text generation request."""

    prompt: str = Field(min_length=1, description="User prompt")
    system_prompt: Optional[str] = Field(default=None, description="Overrides the default compliance expert prompt")
    model: Optional[str] = Field(
        default=None,
        description="Explicit provider (deepseek, gemini, openai); the fallback chain is used when omitted",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1000, ge=1, le=8192)


class GenerateResponse(BaseModel):
    text: str
    provider: str
    tokens: Optional[int] = None


class SearchResultItem(BaseModel):
    title: str
    url: str
    description: str = ""
    thumbnail_url: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResultItem]


class KeyStats(BaseModel):
    key_prefix: str
    usage_count: int
    error_count: int
    disabled: bool
    last_used: Optional[float] = None
    last_error: Optional[str] = None


class ProviderStatus(BaseModel):
    available_keys: int
    keys: List[KeyStats]


class AIStatusResponse(BaseModel):
    providers: Dict[str, ProviderStatus]
