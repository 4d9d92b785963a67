"""
Compliance Document Endpoints.

Documents are attached to a registered system: technical documentation,
risk management plans, instructions for use and similar artefacts.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from compliance_ai.core.database.entities import Document
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import ActivityType
from compliance_ai.core.models.io.documents import DocumentCreate, DocumentRead, DocumentUpdate
from compliance_ai.server.services.deps import ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/system/{system_id}",
    response_model=List[DocumentRead],
    summary="List System Documents",
    description="Retrieve every document attached to a system.",
    response_description="A list of document objects.",
)
async def list_system_documents(system_id: str, repos: ReposDep) -> List[DocumentRead]:
    return [DocumentRead.model_validate(d) for d in await repos.documents.list_by_system(system_id)]


@router.post(
    "",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Document",
    description="Create a compliance document. Creation is recorded as a `document_created` activity.",
    response_description="The created document object.",
)
async def create_document(data: DocumentCreate, repos: ReposDep) -> DocumentRead:
    document = await repos.documents.create(Document(**data.model_dump()))
    await repos.activities.log(
        ActivityType.document_created.value,
        f"Document created: {document.title}",
        user_id=document.created_by,
        system_id=document.system_id,
        details={"document_id": document.id, "type": document.type},
    )
    logger.info(f"Created document {document.id} ({document.type})")
    return DocumentRead.model_validate(document)


@router.put(
    "/{document_id}",
    response_model=DocumentRead,
    summary="Update Document",
    description="Update a compliance document. Only provided fields are changed.",
    response_description="The updated document object.",
    responses={404: {"description": "Document not found"}},
)
async def update_document(document_id: int, data: DocumentUpdate, repos: ReposDep) -> DocumentRead:
    document = await repos.documents.get_by_id(document_id)
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Document with ID {document_id} not found"
        )
    values = data.model_dump(exclude_unset=True)
    return DocumentRead.model_validate(await repos.documents.update_fields(document, values))
