"""
Training Endpoints.

This module provides endpoints for the EU AI Act training catalogue,
per-user progress tracking, completion certificates and module export.
"""

from typing import List

from fastapi import APIRouter, Query, Response, status

from compliance_ai.core.models.io.training import (
    CertificateRead,
    TrainingComplete,
    TrainingModuleMetadata,
    TrainingModuleRead,
    TrainingProgressRead,
    TrainingProgressUpdate,
)
from compliance_ai.server.services.deps import TrainingServiceDep

router = APIRouter()


@router.get(
    "/modules",
    response_model=List[TrainingModuleRead],
    summary="List Training Modules",
    description="Retrieve the training catalogue in course order.",
    response_description="A list of training module objects.",
)
async def list_modules(training: TrainingServiceDep) -> List[TrainingModuleRead]:
    return [TrainingModuleRead.model_validate(m) for m in await training.list_modules()]


@router.get(
    "/modules/{module_id}",
    response_model=TrainingModuleRead,
    summary="Get Training Module",
    description="Retrieve a training module with its sections and assessment questions.",
    response_description="The training module object.",
    responses={404: {"description": "Module not found"}},
)
async def get_module(module_id: str, training: TrainingServiceDep) -> TrainingModuleRead:
    return TrainingModuleRead.model_validate(await training.get_module(module_id))


@router.get(
    "/modules/{module_id}/metadata",
    response_model=TrainingModuleMetadata,
    summary="Get Module Metadata",
    description="Retrieve a training module without its content.",
    response_description="The training module metadata object.",
    responses={404: {"description": "Module not found"}},
)
async def get_module_metadata(module_id: str, training: TrainingServiceDep) -> TrainingModuleMetadata:
    return TrainingModuleMetadata.model_validate(await training.get_module(module_id))


@router.post(
    "/progress",
    response_model=TrainingProgressRead,
    summary="Record Progress",
    description="Create or update a user's progress on a module. Completion is clamped to 0-100.",
    response_description="The stored progress object.",
    responses={404: {"description": "Module not found"}},
)
async def update_progress(data: TrainingProgressUpdate, training: TrainingServiceDep) -> TrainingProgressRead:
    return TrainingProgressRead.model_validate(await training.update_progress(data))


@router.get(
    "/progress",
    response_model=List[TrainingProgressRead],
    summary="Get User Progress",
    description="Retrieve the progress of one user across all modules.",
    response_description="A list of progress objects.",
)
async def get_progress(training: TrainingServiceDep, user_id: str = Query(...)) -> List[TrainingProgressRead]:
    return [TrainingProgressRead.model_validate(p) for p in await training.progress_for_user(user_id)]


@router.post(
    "/complete",
    response_model=TrainingProgressRead,
    summary="Complete Module",
    description="Record full completion of a module and issue a certificate.",
    response_description="The progress object carrying the certificate id.",
    responses={404: {"description": "Module not found"}},
)
async def complete_module(data: TrainingComplete, training: TrainingServiceDep) -> TrainingProgressRead:
    return TrainingProgressRead.model_validate(await training.complete(data))


@router.get(
    "/certificate/{certificate_id}",
    response_model=CertificateRead,
    summary="Get Certificate",
    description="Look up a completion certificate.",
    response_description="The certificate object.",
    responses={404: {"description": "Certificate not found"}},
)
async def get_certificate(certificate_id: str, training: TrainingServiceDep) -> CertificateRead:
    return CertificateRead(**await training.certificate(certificate_id))


@router.get(
    "/export/{module_id}",
    status_code=status.HTTP_200_OK,
    summary="Export Module",
    description="Download a training module as markdown or JSON.",
    response_description="The rendered module as an attachment.",
    responses={400: {"description": "Unsupported format"}, 404: {"description": "Module not found"}},
)
async def export_module(
    module_id: str,
    training: TrainingServiceDep,
    fmt: str = Query("markdown", alias="format", description="markdown or json"),
) -> Response:
    body, media_type, filename = await training.export(module_id, fmt)
    return Response(
        content=body,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
