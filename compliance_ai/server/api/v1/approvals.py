"""
Approval Workflow Endpoints.

This module provides endpoints for submitting compliance records for review,
assigning reviewers, deciding on submissions and inspecting the workflow.

The acting user is identified by the ``X-User-Id`` header.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.io.approvals import (
    ApprovalAssign,
    ApprovalAssignmentRead,
    ApprovalCreated,
    ApprovalDetail,
    ApprovalHistoryRead,
    ApprovalItemCreate,
    ApprovalItemRead,
    ApprovalStatistics,
    ApprovalStatusUpdate,
    Page,
    ReminderResult,
)
from compliance_ai.server.services.deps import ApprovalServiceDep, CurrentUserDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApprovalCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Submit For Approval",
    description=(
        "Submit a record for approval. A reviewer is assigned automatically unless the admin "
        "settings disable auto-assignment, and admins are notified of the submission."
    ),
    response_description="The created approval item and whether a reviewer was auto-assigned.",
    responses={401: {"description": "Missing or unknown X-User-Id"}},
)
async def create_workflow(
    data: ApprovalItemCreate, user: CurrentUserDep, workflows: ApprovalServiceDep
) -> ApprovalCreated:
    """
    Submit a record for approval.

    - **module_type**: risk_assessment, system_registration, document or training
    - **module_id**: Identifier of the record in its own module
    - **priority**: high, medium or low
    """
    item, is_auto_assigned = await workflows.create(data, user)
    return ApprovalCreated(item=ApprovalItemRead.model_validate(item), is_auto_assigned=is_auto_assigned)


@router.get(
    "",
    response_model=Page[ApprovalItemRead],
    summary="List Approval Workflows",
    description="List approval items with filters, free-text search, sorting and pagination.",
    response_description="A page of approval items.",
)
async def list_workflows(
    workflows: ApprovalServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    module_type: Optional[str] = Query(None, alias="moduleType"),
    priority: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort_by: str = Query("submitted_date", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
) -> Page[ApprovalItemRead]:
    result = await workflows.list(
        page=page,
        limit=limit,
        status=status_filter,
        module_type=module_type,
        priority=priority,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return Page[ApprovalItemRead](
        items=[ApprovalItemRead.model_validate(i) for i in result["items"]],
        pagination=result["pagination"],
    )


@router.post(
    "/schedule-reminders",
    response_model=ReminderResult,
    summary="Send Reminders",
    description="Remind reviewers of open assignments due within the next 48 hours.",
    response_description="Number of reminders sent.",
)
async def schedule_reminders(workflows: ApprovalServiceDep) -> ReminderResult:
    return ReminderResult(reminders_sent=await workflows.schedule_reminders())


@router.get(
    "/statistics",
    response_model=ApprovalStatistics,
    summary="Workflow Statistics",
    description="Counts by status, module type and priority, recent submissions, upcoming deadlines and average approval time.",
    response_description="The workflow statistics object.",
)
async def statistics(workflows: ApprovalServiceDep) -> ApprovalStatistics:
    return ApprovalStatistics(**await workflows.statistics())


@router.get(
    "/{workflow_id}",
    response_model=ApprovalDetail,
    summary="Get Approval Workflow",
    description="Retrieve an approval item with its assignments and history.",
    response_description="The approval item, its assignments and its history.",
    responses={404: {"description": "Workflow not found"}},
)
async def get_workflow(workflow_id: str, workflows: ApprovalServiceDep) -> ApprovalDetail:
    detail = await workflows.get(workflow_id)
    return ApprovalDetail(
        item=ApprovalItemRead.model_validate(detail["item"]),
        assignments=[ApprovalAssignmentRead.model_validate(a) for a in detail["assignments"]],
        history=[ApprovalHistoryRead.model_validate(h) for h in detail["history"]],
    )


@router.put(
    "/{workflow_id}/status",
    response_model=ApprovalItemRead,
    summary="Update Workflow Status",
    description=(
        "Change the status of an approval item. Only the assignee, an admin or a compliance officer "
        "may decide. Approval and rejection are applied to the underlying record."
    ),
    response_description="The updated approval item.",
    responses={403: {"description": "Not allowed to decide"}, 404: {"description": "Workflow not found"}},
)
async def update_status(
    workflow_id: str, data: ApprovalStatusUpdate, user: CurrentUserDep, workflows: ApprovalServiceDep
) -> ApprovalItemRead:
    return ApprovalItemRead.model_validate(await workflows.update_status(workflow_id, data, user))


@router.post(
    "/{workflow_id}/assign",
    response_model=ApprovalAssignmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Assign Reviewer",
    description="Assign a reviewer manually. Only admins and compliance officers may assign.",
    response_description="The created assignment.",
    responses={403: {"description": "Not allowed to assign"}, 404: {"description": "Workflow or user not found"}},
)
async def assign_reviewer(
    workflow_id: str, data: ApprovalAssign, user: CurrentUserDep, workflows: ApprovalServiceDep
) -> ApprovalAssignmentRead:
    return ApprovalAssignmentRead.model_validate(await workflows.assign(workflow_id, data, user))
