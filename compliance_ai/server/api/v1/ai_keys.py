"""
AI Provider Key Endpoints.

Stored provider keys are managed here. Responses never include the raw key,
only a ``first4...last4`` mask.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from compliance_ai.ai_services.api_key_manager import is_permanent_failure
from compliance_ai.ai_services.providers import PROVIDER_CALLS, test_provider_key
from compliance_ai.core.database.entities import ApiKey
from compliance_ai.core.errors import AppError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import AIProvider
from compliance_ai.core.models.io.api_keys import ApiKeyCreate, ApiKeyRead, ApiKeyTestResult, ApiKeyUpdate
from compliance_ai.core.security import mask_secret
from compliance_ai.server.services.deps import ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[ApiKeyRead],
    summary="List API Keys",
    description="Retrieve stored provider keys, optionally filtered by provider. Keys are masked.",
    response_description="A list of masked API key objects.",
)
async def list_keys(repos: ReposDep, provider: Optional[AIProvider] = Query(None)) -> List[ApiKeyRead]:
    keys = await repos.api_keys.list_by_provider(provider.value if provider else None)
    return [ApiKeyRead.from_entity(k) for k in keys]


@router.post(
    "",
    response_model=ApiKeyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Store API Key",
    description="Store a provider key.",
    response_description="The stored key, masked.",
)
async def create_key(data: ApiKeyCreate, repos: ReposDep) -> ApiKeyRead:
    api_key = await repos.api_keys.create(
        ApiKey(
            provider=data.provider.value,
            key=data.key.strip(),
            description=data.description,
            is_active=data.is_active,
            usage_limit=data.usage_limit,
        )
    )
    logger.info(f"Stored {api_key.provider} key {mask_secret(api_key.key)}")
    return ApiKeyRead.from_entity(api_key)


@router.put(
    "/{key_id}",
    response_model=ApiKeyRead,
    summary="Update API Key",
    description="Update a stored key. Sending an empty `key` is rejected.",
    response_description="The updated key, masked.",
    responses={400: {"description": "Empty key"}, 404: {"description": "Key not found"}},
)
async def update_key(key_id: int, data: ApiKeyUpdate, repos: ReposDep) -> ApiKeyRead:
    api_key = await repos.api_keys.get_by_id(key_id)
    if api_key is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"API key with ID {key_id} not found")

    values = data.model_dump(exclude_unset=True)
    if "key" in values:
        if not (values["key"] or "").strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="API key must not be empty")
        values["key"] = values["key"].strip()
    return ApiKeyRead.from_entity(await repos.api_keys.update_fields(api_key, values))


@router.delete(
    "/{key_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete API Key",
    description="Remove a stored key.",
    responses={404: {"description": "Key not found"}},
)
async def delete_key(key_id: int, repos: ReposDep) -> None:
    if not await repos.api_keys.delete(key_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"API key with ID {key_id} not found")


@router.get(
    "/test/{provider}",
    response_model=ApiKeyTestResult,
    summary="Test API Key",
    description=(
        "Send a minimal request with the least used active key of a provider. "
        "A key rejected as invalid is deactivated."
    ),
    response_description="The outcome of the test call.",
    responses={
        400: {"description": "Provider has no key test"},
        404: {"description": "No active key for the provider"},
    },
)
async def test_key(provider: AIProvider, repos: ReposDep) -> ApiKeyTestResult:
    """
    Test a stored provider key.

    - **provider**: deepseek, gemini or openai
    """
    if provider.value not in PROVIDER_CALLS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"API key test is not supported for provider '{provider.value}'",
        )
    api_key = await repos.api_keys.get_active_for_provider(provider.value)
    if api_key is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"No active API key found for provider '{provider.value}'"
        )

    masked = mask_secret(api_key.key)
    try:
        await test_provider_key(provider.value, api_key.key)
    except AppError as e:
        if is_permanent_failure(e):
            await repos.api_keys.deactivate(api_key)
            logger.warning(f"Deactivated {provider.value} key {masked}: {e.message}")
        return ApiKeyTestResult(provider=provider.value, success=False, message=e.message, masked_key=masked)

    await repos.api_keys.record_usage(api_key)
    return ApiKeyTestResult(provider=provider.value, success=True, message="API key is valid", masked_key=masked)
