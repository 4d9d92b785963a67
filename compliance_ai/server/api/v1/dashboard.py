"""Dashboard Endpoints."""

from fastapi import APIRouter

from compliance_ai.core.models.io.dashboard import DashboardSummary
from compliance_ai.core.models.io.tracking import DepartmentRead
from compliance_ai.server.services.deps import DashboardServiceDep

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Compliance Summary",
    description=(
        "Aggregate compliance figures: system counts, average documentation and training "
        "completeness, risk distribution and per-department compliance scores."
    ),
    response_description="The dashboard summary object.",
)
async def get_summary(dashboard: DashboardServiceDep) -> DashboardSummary:
    summary = await dashboard.summary()
    summary["department_compliance"] = [DepartmentRead.model_validate(d) for d in summary["department_compliance"]]
    return DashboardSummary(**summary)
