"""Document inspection endpoints."""

import uuid as uuid_pkg
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ....modules.chunk.schemas import ChunkListResponse
from ....modules.chunk.services import ChunkService
from ....modules.common.exceptions import ResourceNotFoundError
from ....modules.document.schemas import DocumentListResponse, DocumentRead
from ....modules.document.services import DocumentService
from ..dependencies import DbSession, get_chunk_service, get_document_service

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get(
    "",
    response_model=DocumentListResponse,
    summary="List Documents",
    description="""
    Retrieves a paginated list of ingested documents.

    Returns documents ordered by last update time (most recent first).
    Each document includes its chunk count.

    - **page**: Page number (1-indexed, default: 1)
    - **items_per_page**: Number of documents per page (default: 50, max: 100)
    """,
    responses={
        200: {"description": "Paginated list of documents"},
    },
)
async def get_documents(
    db: DbSession,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    items_per_page: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 50,
    document_service: DocumentService = Depends(get_document_service),
):
    """Get documents with pagination."""
    return await document_service.get_documents(db, page, items_per_page)


@router.get(
    "/{document_id}",
    summary="Get Document Details",
    description="""
    Retrieves details for a specific document by ID, along with its current
    chunk count.
    """,
    responses={
        200: {"description": "Document details with chunk count"},
        404: {"description": "Document not found"},
    },
)
async def get_document(
    document_id: uuid_pkg.UUID,
    db: DbSession,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentRead:
    """Get a specific document by ID."""
    result = await document_service.get_document(document_id, db)
    if result is None:
        raise ResourceNotFoundError("Document not found")
    return result


@router.get(
    "/{document_id}/chunks",
    response_model=ChunkListResponse,
    summary="List Document Chunks",
    description="""
    Retrieves the chunks of a document in chunk order, without embeddings.

    - **page**: Page number (1-indexed, default: 1)
    - **items_per_page**: Number of chunks per page (default: 50, max: 100)
    """,
    responses={
        200: {"description": "Paginated list of chunks"},
        404: {"description": "Document not found"},
    },
)
async def get_document_chunks(
    document_id: uuid_pkg.UUID,
    db: DbSession,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    items_per_page: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 50,
    document_service: DocumentService = Depends(get_document_service),
    chunk_service: ChunkService = Depends(get_chunk_service),
):
    """Get a document's chunks with pagination."""
    if await document_service.get_document(document_id, db) is None:
        raise ResourceNotFoundError("Document not found")
    return await chunk_service.get_chunks_by_document(document_id, db, page, items_per_page)


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Document",
    description="""Delete a document and all its chunks.

    This action cannot be undone.
    """,
    responses={
        204: {"description": "Document deleted successfully"},
        404: {"description": "Document not found"},
    },
)
async def delete_document(
    document_id: uuid_pkg.UUID,
    db: DbSession,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """Delete a document and all its chunks."""
    deleted = await document_service.delete_document(document_id, db)
    if not deleted:
        raise ResourceNotFoundError("Document not found")
