"""Chunk storage operations."""

import uuid as uuid_pkg
from datetime import datetime, timezone
from typing import Any, List, Sequence

from fastcrud.paginated.response import paginated_response
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..document.crud import document_crud
from .crud import chunk_crud
from .models import Chunk
from .schemas import ChunkCreate, ChunkRead


class ChunkService:
    """Service for storing and reading document chunks.

    Like ``DocumentService``, write operations do not commit: ingestion
    deletes the old chunks and inserts the new batch inside one transaction.
    """

    async def delete_chunks(
        self,
        document_id: uuid_pkg.UUID,
        db: AsyncSession,
    ) -> int:
        """Delete all chunks of a document.

        Returns:
            Number of rows deleted
        """
        result = await db.execute(delete(Chunk).where(Chunk.document_id == document_id))
        return result.rowcount or 0

    async def insert_chunks(
        self,
        document_id: uuid_pkg.UUID,
        chunks: Sequence[ChunkCreate],
        db: AsyncSession,
    ) -> int:
        """Bulk insert chunk rows for a document.

        Args:
            document_id: Owning document
            chunks: Verified chunk/embedding pairs in ordinal order
            db: Database session

        Returns:
            Number of rows inserted
        """
        if not chunks:
            return 0

        now = datetime.now(timezone.utc)
        rows = [
            {
                "document_id": document_id,
                "chunk_index": chunk.chunk_index,
                "content": chunk.content,
                "embedding": chunk.embedding,
                "created_at": now,
                "updated_at": now,
            }
            for chunk in chunks
        ]

        await db.execute(insert(Chunk), rows)
        return len(rows)

    async def list_chunks(
        self,
        document_id: uuid_pkg.UUID,
        db: AsyncSession,
        limit: int = 750,
    ) -> List[Chunk]:
        """Chunks of a document in ordinal order, at most ``limit`` of them."""
        stmt = select(Chunk).where(Chunk.document_id == document_id).order_by(Chunk.chunk_index).limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_chunks_by_document(
        self,
        document_id: uuid_pkg.UUID,
        db: AsyncSession,
        page: int = 1,
        items_per_page: int = 50,
    ) -> dict[str, Any]:
        """Get chunks in a document with pagination.

        Args:
            document_id: Document ID to get chunks from
            db: Database session
            page: Page number (1-indexed)
            items_per_page: Number of chunks per page

        Returns:
            Paginated response with chunks (embeddings omitted)
        """
        document_exists = await document_crud.exists(db=db, id=document_id)
        if not document_exists:
            return paginated_response({"data": [], "total_count": 0}, page, items_per_page)

        offset = (page - 1) * items_per_page

        result = await chunk_crud.get_multi(
            db=db,
            document_id=document_id,
            limit=items_per_page,
            offset=offset,
            sort_columns="chunk_index",
            sort_orders="asc",
        )

        chunks_data = result.get("data", [])
        total_count = result.get("total_count", 0)

        chunks = [ChunkRead.model_validate(chunk).model_dump() for chunk in chunks_data]
        crud_data = {"data": chunks, "total_count": total_count}

        return paginated_response(crud_data, page, items_per_page)
