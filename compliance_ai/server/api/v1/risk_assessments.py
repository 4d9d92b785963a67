"""
Risk Assessment Endpoints.

This module provides endpoints for recording EU AI Act risk assessments of
registered systems. Recording an assessment also updates the system's risk
classification.
"""

from typing import List

from fastapi import APIRouter, status

from compliance_ai.core.models.io.risk_assessments import (
    RiskAssessmentCreate,
    RiskAssessmentRead,
    RiskAssessmentUpdate,
)
from compliance_ai.server.services.deps import RiskAssessmentServiceDep

router = APIRouter()


@router.get(
    "/system/{system_id}",
    response_model=List[RiskAssessmentRead],
    summary="List System Assessments",
    description="Retrieve the assessments of one system, newest first.",
    response_description="A list of risk assessment objects.",
)
async def list_system_assessments(system_id: str, assessments: RiskAssessmentServiceDep) -> List[RiskAssessmentRead]:
    return [RiskAssessmentRead.model_validate(a) for a in await assessments.list_for_system(system_id)]


@router.get(
    "/{assessment_id}",
    response_model=RiskAssessmentRead,
    summary="Get Risk Assessment",
    description="Retrieve one assessment by its numeric ID.",
    response_description="The risk assessment object.",
    responses={404: {"description": "Assessment not found"}},
)
async def get_assessment(assessment_id: int, assessments: RiskAssessmentServiceDep) -> RiskAssessmentRead:
    return RiskAssessmentRead.model_validate(await assessments.get(assessment_id))


@router.post(
    "",
    response_model=RiskAssessmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Risk Assessment",
    description=(
        "Record an assessment for a registered system. The system's risk level, risk score and "
        "last assessment date are updated from the assessment."
    ),
    response_description="The recorded risk assessment object.",
    responses={404: {"description": "System not found"}},
)
async def create_assessment(data: RiskAssessmentCreate, assessments: RiskAssessmentServiceDep) -> RiskAssessmentRead:
    """
    Record a risk assessment.

    - **system_id**: Public identifier of the assessed system
    - **risk_level**: unacceptable, high, limited or minimal
    - **assessment_id**: Optional; generated as ``RA-<8 hex>`` when omitted
    """
    return RiskAssessmentRead.model_validate(await assessments.create(data))


@router.put(
    "/{assessment_id}",
    response_model=RiskAssessmentRead,
    summary="Update Risk Assessment",
    description="Update an assessment. Only provided fields are changed.",
    response_description="The updated risk assessment object.",
    responses={404: {"description": "Assessment not found"}},
)
async def update_assessment(
    assessment_id: int, data: RiskAssessmentUpdate, assessments: RiskAssessmentServiceDep
) -> RiskAssessmentRead:
    return RiskAssessmentRead.model_validate(await assessments.update(assessment_id, data))
