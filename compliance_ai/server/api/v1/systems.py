"""
AI System Inventory Endpoints.

This module provides endpoints for registering, reading, updating and
removing the AI systems tracked for EU AI Act compliance.
"""

from typing import List

from fastapi import APIRouter, Query, status

from compliance_ai.core.models.io.systems import AISystemCreate, AISystemRead, AISystemUpdate
from compliance_ai.server.services.deps import SystemServiceDep

router = APIRouter()


@router.get(
    "",
    response_model=List[AISystemRead],
    summary="List AI Systems",
    description="Retrieve every registered AI system.",
    response_description="A list of AI system objects.",
)
async def list_systems(systems: SystemServiceDep) -> List[AISystemRead]:
    return [AISystemRead.model_validate(s) for s in await systems.list()]


@router.get(
    "/high-risk",
    response_model=List[AISystemRead],
    summary="List High-Risk Systems",
    description="Retrieve systems classified as high risk, highest risk score first.",
    response_description="A list of high-risk AI system objects.",
)
async def list_high_risk_systems(
    systems: SystemServiceDep, limit: int = Query(5, ge=1, le=100)
) -> List[AISystemRead]:
    return [AISystemRead.model_validate(s) for s in await systems.high_risk(limit=limit)]


@router.get(
    "/{system_id}",
    response_model=AISystemRead,
    summary="Get AI System",
    description="Retrieve one AI system by its public identifier.",
    response_description="The AI system object.",
    responses={404: {"description": "System not found"}},
)
async def get_system(system_id: str, systems: SystemServiceDep) -> AISystemRead:
    return AISystemRead.model_validate(await systems.get(system_id))


@router.post(
    "",
    response_model=AISystemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register AI System",
    description=(
        "Register an AI system. Empty or malformed dates are stored as null and list values of "
        "free-text fields are joined with commas. A system id is generated when none is given."
    ),
    response_description="The registered AI system object.",
    responses={409: {"description": "System id already exists"}},
)
async def create_system(data: AISystemCreate, systems: SystemServiceDep) -> AISystemRead:
    """
    Register an AI system.

    Registration is recorded as a ``system_created`` activity.
    """
    return AISystemRead.model_validate(await systems.create(data))


@router.patch(
    "/{system_id}",
    response_model=AISystemRead,
    summary="Update AI System",
    description="Partially update an AI system. Only provided fields are changed.",
    response_description="The updated AI system object.",
    responses={404: {"description": "System not found"}},
)
async def update_system(system_id: str, data: AISystemUpdate, systems: SystemServiceDep) -> AISystemRead:
    return AISystemRead.model_validate(await systems.update(system_id, data))


@router.delete(
    "/{system_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete AI System",
    description="Remove an AI system from the inventory.",
    responses={404: {"description": "System not found"}},
)
async def delete_system(system_id: str, systems: SystemServiceDep) -> None:
    await systems.delete(system_id)
