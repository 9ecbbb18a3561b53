"""Knowledge-base ingestion endpoint."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ....modules.common.exceptions import FileTooLargeError, ValidationError
from ....modules.ingestion.schemas import IngestResult, UploadedFile
from ....modules.ingestion.services import IngestionService
from ..dependencies import DbSession, get_ingestion_service

router = APIRouter(prefix="/kb", tags=["Knowledge Base"])


@router.post(
    "/ingest",
    summary="Ingest Document",
    description="""
    Uploads a PDF or UTF-8 text document into the knowledge base.

    The text is extracted, split into overlapping word windows and embedded
    chunk by chunk. Re-uploading a document with the same title and source
    replaces its chunks instead of adding to them.

    - **file**: The document (PDF or plain text)
    - **title**: Document title (required)
    - **source**: Optional source label
    """,
    responses={
        200: {"description": "Document stored with its chunks"},
        400: {"description": "Missing file, empty file or missing title"},
        413: {"description": "File exceeds the configured size limit"},
        415: {"description": "Unsupported document type"},
        422: {"description": "No extractable text, or too many chunks"},
        502: {"description": "Embedding generation failed"},
    },
)
async def ingest_document(
    db: DbSession,
    service: Annotated[IngestionService, Depends(get_ingestion_service)],
    file: Annotated[Optional[UploadFile], File()] = None,
    title: Annotated[Optional[str], Form()] = None,
    source: Annotated[Optional[str], Form()] = None,
) -> IngestResult:
    """Ingest an uploaded document."""
    if file is None:
        raise ValidationError("Expected 'file' field with a document upload")

    max_bytes = service.settings.KB_MAX_FILE_BYTES
    if file.size is not None and file.size > max_bytes:
        raise FileTooLargeError(size=file.size, limit=max_bytes)

    upload = UploadedFile(
        data=await file.read(),
        filename=file.filename or "",
        media_type=file.content_type or "",
    )
    return await service.ingest(upload, title=title, source=source, db=db)
