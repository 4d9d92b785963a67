"""
Regulatory Glossary Endpoints.

Terms of the EU AI Act with definitions and article references, per language.
Changing or removing a term requires the admin role.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from compliance_ai.core.database.entities import RegulatoryTerm
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import Language
from compliance_ai.core.models.io.regulatory_terms import (
    RegulatoryTermCreate,
    RegulatoryTermRead,
    RegulatoryTermUpdate,
)
from compliance_ai.server.services.deps import AdminUserDep, OptionalUserDep, ReposDep

logger = get_logger(__name__)

router = APIRouter()

# Creator recorded when a term is added without an acting user.
ANONYMOUS_CREATOR = "test-admin"


@router.get(
    "",
    response_model=List[RegulatoryTermRead],
    summary="List Terms",
    description="Retrieve the glossary of one language, alphabetically.",
    response_description="A list of term objects.",
)
async def list_terms(repos: ReposDep, language: Language = Query(Language.en)) -> List[RegulatoryTermRead]:
    return [RegulatoryTermRead.model_validate(t) for t in await repos.regulatory_terms.list_by_language(language.value)]


@router.get(
    "/search/{term}",
    response_model=List[RegulatoryTermRead],
    summary="Search Terms",
    description="Case-insensitive search by term name. Exact matches come first.",
    response_description="A list of matching term objects.",
    responses={404: {"description": "No matching term"}},
)
async def search_terms(
    term: str, repos: ReposDep, language: Language = Query(Language.en)
) -> List[RegulatoryTermRead]:
    matches = await repos.regulatory_terms.search(term, language.value)
    if not matches:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Term '{term}' not found")
    return [RegulatoryTermRead.model_validate(t) for t in matches]


@router.get(
    "/{term_id}",
    response_model=RegulatoryTermRead,
    summary="Get Term",
    responses={404: {"description": "Term not found"}},
)
async def get_term(term_id: int, repos: ReposDep) -> RegulatoryTermRead:
    term = await repos.regulatory_terms.get_by_id(term_id)
    if term is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Term with ID {term_id} not found")
    return RegulatoryTermRead.model_validate(term)


@router.post(
    "",
    response_model=RegulatoryTermRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Term",
    description="Add a glossary term. The acting user, when known, is recorded as creator.",
    response_description="The created term object.",
)
async def create_term(data: RegulatoryTermCreate, repos: ReposDep, user: OptionalUserDep) -> RegulatoryTermRead:
    term = await repos.regulatory_terms.create(
        RegulatoryTerm(**data.model_dump(mode="json"), created_by=user.uid if user else ANONYMOUS_CREATOR)
    )
    return RegulatoryTermRead.model_validate(term)


@router.put(
    "/{term_id}",
    response_model=RegulatoryTermRead,
    summary="Update Term",
    description="Update a glossary term. Admin only.",
    response_description="The updated term object.",
    responses={403: {"description": "Admin role required"}, 404: {"description": "Term not found"}},
)
async def update_term(
    term_id: int, data: RegulatoryTermUpdate, repos: ReposDep, admin: AdminUserDep
) -> RegulatoryTermRead:
    term = await repos.regulatory_terms.get_by_id(term_id)
    if term is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Term with ID {term_id} not found")
    values = data.model_dump(exclude_unset=True, mode="json")
    logger.info(f"Term {term_id} updated by {admin.uid}")
    return RegulatoryTermRead.model_validate(await repos.regulatory_terms.update_fields(term, values))


@router.delete(
    "/{term_id}",
    summary="Delete Term",
    description="Remove a glossary term. Admin only.",
    responses={403: {"description": "Admin role required"}, 404: {"description": "Term not found"}},
)
async def delete_term(term_id: int, repos: ReposDep, admin: AdminUserDep):
    if not await repos.regulatory_terms.delete(term_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Term with ID {term_id} not found")
    logger.info(f"Term {term_id} deleted by {admin.uid}")
    return {"success": True}
