"""Compliance Alert Endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from compliance_ai.core.database.entities import Alert
from compliance_ai.core.models.io.tracking import AlertCreate, AlertRead
from compliance_ai.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "/critical",
    response_model=List[AlertRead],
    summary="Critical Alerts",
    description="Retrieve unresolved alerts of critical severity.",
    response_description="A list of alert objects, newest first.",
)
async def critical_alerts(repos: ReposDep, limit: int = Query(3, ge=1, le=100)) -> List[AlertRead]:
    return [AlertRead.model_validate(a) for a in await repos.alerts.critical(limit=limit)]


@router.post(
    "",
    response_model=AlertRead,
    status_code=status.HTTP_201_CREATED,
    summary="Raise Alert",
    description="Raise a compliance alert, optionally against a system.",
    response_description="The created alert object.",
)
async def create_alert(data: AlertCreate, repos: ReposDep) -> AlertRead:
    alert = await repos.alerts.create(Alert(**data.model_dump()))
    return AlertRead.model_validate(alert)


@router.put(
    "/{alert_id}/resolve",
    response_model=AlertRead,
    summary="Resolve Alert",
    description="Mark an alert as resolved.",
    response_description="The resolved alert object.",
    responses={404: {"description": "Alert not found"}},
)
async def resolve_alert(alert_id: int, repos: ReposDep) -> AlertRead:
    alert = await repos.alerts.get_by_id(alert_id)
    if alert is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Alert with ID {alert_id} not found")
    return AlertRead.model_validate(await repos.alerts.resolve(alert))
