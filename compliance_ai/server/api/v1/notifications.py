"""Approval Notification Endpoints."""

from fastapi import APIRouter, Query

from compliance_ai.core.models.io.approvals import (
    ApprovalNotificationRead,
    MarkReadRequest,
    MarkReadResult,
    Page,
    UnreadCount,
)
from compliance_ai.server.services.deps import ApprovalServiceDep, CurrentUserDep

router = APIRouter()


@router.get(
    "",
    response_model=Page[ApprovalNotificationRead],
    summary="List Notifications",
    description="List the acting user's notifications, newest first.",
    response_description="A page of notifications.",
)
async def list_notifications(
    user: CurrentUserDep,
    workflows: ApprovalServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    unread_only: bool = Query(False, alias="unreadOnly"),
) -> Page[ApprovalNotificationRead]:
    result = await workflows.list_notifications(user, page=page, limit=limit, unread_only=unread_only)
    return Page[ApprovalNotificationRead](
        items=[ApprovalNotificationRead.model_validate(n) for n in result["items"]],
        pagination=result["pagination"],
    )


@router.put(
    "/mark-read",
    response_model=MarkReadResult,
    summary="Mark Notifications Read",
    description="Mark the given notifications of the acting user as read.",
    response_description="Number of notifications updated.",
    responses={400: {"description": "Empty notification id list"}},
)
async def mark_read(data: MarkReadRequest, user: CurrentUserDep, workflows: ApprovalServiceDep) -> MarkReadResult:
    return MarkReadResult(updated=await workflows.mark_notifications_read(user, data.notification_ids))


@router.get(
    "/unread-count",
    response_model=UnreadCount,
    summary="Unread Count",
    description="Number of unread notifications of the acting user.",
)
async def unread_count(user: CurrentUserDep, workflows: ApprovalServiceDep) -> UnreadCount:
    return UnreadCount(unread_count=await workflows.unread_count(user))
