"""
AI Assistant Endpoints.

Text generation runs through the provider fallback chain; search goes to
Google Custom Search. Key rotation state is exposed for operators.
"""

from typing import Optional

from fastapi import APIRouter, Query

from compliance_ai.ai_services.api_key_manager import api_key_manager
from compliance_ai.ai_services.google_search import google_search
from compliance_ai.ai_services.service import call_ai
from compliance_ai.core.models.domain import AIProvider
from compliance_ai.core.models.io.ai import (
    AIStatusResponse,
    GenerateRequest,
    GenerateResponse,
    ProviderStatus,
    SearchResponse,
    SearchResultItem,
)

router = APIRouter()


@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate Text",
    description=(
        "Generate a response with an explicitly chosen provider, or with the fallback chain "
        "DeepSeek, Gemini, Google Search when no model is given."
    ),
    response_description="The generated text and the provider that produced it.",
    responses={
        400: {"description": "Unknown model"},
        500: {"description": "All AI providers failed"},
    },
)
async def generate(data: GenerateRequest) -> GenerateResponse:
    """
    Generate text.

    - **prompt**: The user prompt
    - **system_prompt**: Optional; defaults to an EU AI Act compliance expert
    - **model**: Optional; deepseek, gemini or openai
    """
    response = await call_ai(
        data.prompt,
        system_prompt=data.system_prompt,
        model=data.model,
        temperature=data.temperature,
        max_tokens=data.max_tokens,
    )
    return GenerateResponse(text=response.text, provider=response.provider, tokens=response.tokens)


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Web Search",
    description="Search the web with Google Custom Search. Returns no results when every key fails.",
    response_description="The query and its result items.",
)
async def search(
    q: str = Query(..., min_length=1, description="Search query"),
    num: int = Query(10, ge=1, le=10),
    site_search: Optional[str] = Query(None, alias="siteSearch"),
    exact_terms: Optional[str] = Query(None, alias="exactTerms"),
) -> SearchResponse:
    results = await google_search(q, num=num, site_search=site_search, exact_terms=exact_terms)
    return SearchResponse(query=q, results=[SearchResultItem(**r) for r in results])


@router.get(
    "/status",
    response_model=AIStatusResponse,
    summary="Provider Key Status",
    description="Rotation statistics of the in-memory key pools. Keys are shown by prefix only.",
    response_description="Per-provider key statistics.",
)
async def provider_status() -> AIStatusResponse:
    return AIStatusResponse(
        providers={
            provider.value: ProviderStatus(
                available_keys=api_key_manager.available_key_count(provider.value),
                keys=api_key_manager.get_key_stats(provider.value),
            )
            for provider in AIProvider
            if api_key_manager.is_registered(provider.value)
        }
    )
