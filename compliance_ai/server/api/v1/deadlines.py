"""Deadline Endpoints."""

from typing import List

from fastapi import APIRouter, Query, status

from compliance_ai.core.database.entities import Deadline
from compliance_ai.core.models.io.tracking import DeadlineCreate, DeadlineRead
from compliance_ai.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "/upcoming",
    response_model=List[DeadlineRead],
    summary="Upcoming Deadlines",
    description="Retrieve the next deadlines that have not passed yet.",
    response_description="A list of deadline objects, soonest first.",
)
async def upcoming_deadlines(repos: ReposDep, limit: int = Query(3, ge=1, le=100)) -> List[DeadlineRead]:
    return [DeadlineRead.model_validate(d) for d in await repos.deadlines.upcoming(limit=limit)]


@router.post(
    "",
    response_model=DeadlineRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Deadline",
    description="Create a regulatory or internal deadline.",
    response_description="The created deadline object.",
)
async def create_deadline(data: DeadlineCreate, repos: ReposDep) -> DeadlineRead:
    values = data.model_dump()
    values["date"] = values["date"].replace(tzinfo=None)
    deadline = await repos.deadlines.create(Deadline(**values))
    return DeadlineRead.model_validate(deadline)
