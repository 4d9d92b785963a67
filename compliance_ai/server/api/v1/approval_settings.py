"""Approval Settings Endpoints."""

from fastapi import APIRouter

from compliance_ai.core.models.io.approvals import ApprovalSettingsRead, ApprovalSettingsUpdate
from compliance_ai.server.services.deps import ApprovalServiceDep, CurrentUserDep

router = APIRouter()


@router.get(
    "",
    response_model=ApprovalSettingsRead,
    summary="Get Approval Settings",
    description="Retrieve the acting user's workflow settings. Defaults are created on first access.",
    response_description="The settings object.",
)
async def get_settings(user: CurrentUserDep, workflows: ApprovalServiceDep) -> ApprovalSettingsRead:
    return ApprovalSettingsRead.model_validate(await workflows.get_settings(user))


@router.put(
    "",
    response_model=ApprovalSettingsRead,
    summary="Update Approval Settings",
    description=(
        "Update the acting user's workflow settings. The settings of the first admin decide "
        "whether submissions are auto-assigned."
    ),
    response_description="The updated settings object.",
)
async def update_settings(
    data: ApprovalSettingsUpdate, user: CurrentUserDep, workflows: ApprovalServiceDep
) -> ApprovalSettingsRead:
    return ApprovalSettingsRead.model_validate(await workflows.update_settings(user, data))
