"""Activity Log Endpoints."""

from typing import List

from fastapi import APIRouter, Query, status

from compliance_ai.core.models.io.tracking import ActivityCreate, ActivityRead
from compliance_ai.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "/recent",
    response_model=List[ActivityRead],
    summary="Recent Activities",
    description="Retrieve the most recent entries of the activity log.",
    response_description="A list of activity objects, newest first.",
)
async def recent_activities(repos: ReposDep, limit: int = Query(5, ge=1, le=100)) -> List[ActivityRead]:
    return [ActivityRead.model_validate(a) for a in await repos.activities.recent(limit=limit)]


@router.post(
    "",
    response_model=ActivityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log Activity",
    description="Append an entry to the activity log.",
    response_description="The created activity object.",
)
async def create_activity(data: ActivityCreate, repos: ReposDep) -> ActivityRead:
    activity = await repos.activities.log(
        data.type, data.description, user_id=data.user_id, system_id=data.system_id, details=data.details
    )
    return ActivityRead.model_validate(activity)
