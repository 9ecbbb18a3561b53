"""Document lookup and lifecycle operations."""

import uuid as uuid_pkg
from datetime import UTC, datetime
from typing import Any, Optional

from fastcrud.paginated.response import paginated_response
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..chunk.models import Chunk
from ..chunk.services import ChunkService
from .crud import document_crud
from .models import Document
from .schemas import DocumentRead

_LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )


def _row_to_read(row: Any) -> DocumentRead:
    return DocumentRead(
        id=row.id,
        title=row.title,
        source=row.source,
        created_at=row.created_at,
        updated_at=row.updated_at,
        chunk_count=row.chunk_count,
    )


class DocumentService:
    """Service for managing knowledge-base documents.

    Documents are keyed by ``(title, source)``. Writes made here are only
    flushed; the caller owns the transaction and decides when to commit, so a
    document and its chunks can be written atomically.
    """

    async def find_document(
        self,
        title: str,
        source: Optional[str],
        db: AsyncSession,
    ) -> Optional[Document]:
        """Find a document by its identity pair.

        A missing source matches rows whose source IS NULL, never rows with
        an empty-string source.
        """
        stmt = select(Document).where(Document.title == title)
        if source is None:
            stmt = stmt.where(Document.source.is_(None))
        else:
            stmt = stmt.where(Document.source == source)

        result = await db.execute(stmt.limit(1))
        return result.scalars().first()

    async def create_document(
        self,
        title: str,
        source: Optional[str],
        db: AsyncSession,
    ) -> Document:
        """Add a new document row and flush it so its id is available."""
        document = Document(title=title, source=source)
        db.add(document)
        await db.flush()
        return document

    async def touch_document(self, document: Document, db: AsyncSession) -> None:
        """Refresh ``updated_at`` on a document being re-ingested."""
        document.updated_at = datetime.now(UTC)
        await db.flush()

    async def find_document_by_title_prefix(
        self,
        title_prefix: str,
        db: AsyncSession,
    ) -> Optional[Document]:
        """Case-insensitive prefix match on title; the most recently updated match wins."""
        pattern = f"{_escape_like(title_prefix)}%"
        stmt = (
            select(Document)
            .where(Document.title.ilike(pattern, escape=_LIKE_ESCAPE))
            .order_by(Document.updated_at.desc())
            .limit(1)
        )
        result = await db.execute(stmt)
        return result.scalars().first()

    async def get_document(
        self,
        document_id: uuid_pkg.UUID,
        db: AsyncSession,
    ) -> Optional[DocumentRead]:
        """Get a specific document with its chunk count.

        Args:
            document_id: Document ID to retrieve
            db: Database session

        Returns:
            Document data with chunk count, or None if it does not exist
        """
        stmt = await document_crud.select(id=document_id)
        stmt = (
            stmt.add_columns(func.count(Chunk.id).label("chunk_count"))
            .outerjoin(Chunk, Document.id == Chunk.document_id)
            .group_by(Document.id)
        )

        result = await db.execute(stmt)
        row = result.first()

        if not row:
            return None

        return _row_to_read(row)

    async def get_documents(
        self,
        db: AsyncSession,
        page: int = 1,
        items_per_page: int = 50,
    ) -> dict[str, Any]:
        """Get all documents with pagination and chunk counts.

        Args:
            db: Database session
            page: Page number (1-indexed)
            items_per_page: Number of documents per page

        Returns:
            Paginated response with documents and counts
        """
        offset = (page - 1) * items_per_page

        stmt = await document_crud.select(sort_columns="updated_at", sort_orders="desc")
        stmt = (
            stmt.add_columns(func.count(Chunk.id).label("chunk_count"))
            .outerjoin(Chunk, Document.id == Chunk.document_id)
            .group_by(Document.id)
            .offset(offset)
            .limit(items_per_page)
        )

        result = await db.execute(stmt)
        rows = result.fetchall()

        total_count = await document_crud.count(db=db)

        documents = [_row_to_read(row).model_dump() for row in rows]
        crud_data = {"data": documents, "total_count": total_count}

        return paginated_response(crud_data, page, items_per_page)

    async def delete_document(
        self,
        document_id: uuid_pkg.UUID,
        db: AsyncSession,
    ) -> bool:
        """Delete a document and all its chunks.

        Returns:
            True if the document existed and was deleted
        """
        document = await db.get(Document, document_id)
        if document is None:
            return False

        await ChunkService().delete_chunks(document_id, db)
        await db.delete(document)
        await db.commit()

        return True
