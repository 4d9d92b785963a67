"""Risk Management Overview Endpoints."""

from typing import List

from fastapi import APIRouter

from compliance_ai.core.models.io.risk_assessments import RiskAssessmentRead, SystemWithAssessments
from compliance_ai.core.models.io.systems import AISystemRead
from compliance_ai.server.services.deps import ReposDep, RiskAssessmentServiceDep

router = APIRouter()


@router.get(
    "/assessments",
    response_model=List[RiskAssessmentRead],
    summary="List All Assessments",
    description="Retrieve every risk assessment, newest first.",
    response_description="A list of risk assessment objects.",
)
async def list_assessments(repos: ReposDep) -> List[RiskAssessmentRead]:
    return [RiskAssessmentRead.model_validate(a) for a in await repos.risk_assessments.list_recent()]


@router.get(
    "/systems",
    response_model=List[SystemWithAssessments],
    summary="Systems With Assessments",
    description="Retrieve every registered system together with its assessments.",
    response_description="A list of systems, each with its assessments newest first.",
)
async def list_systems_with_assessments(assessments: RiskAssessmentServiceDep) -> List[SystemWithAssessments]:
    return [
        SystemWithAssessments(
            system=AISystemRead.model_validate(entry["system"]),
            assessments=[RiskAssessmentRead.model_validate(a) for a in entry["assessments"]],
        )
        for entry in await assessments.systems_with_assessments()
    ]
