"""Document ingestion: extract, normalize, chunk, embed, store."""

import asyncio
from typing import List, Optional, Sequence

import anyio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.embedding import EmbeddingProvider
from ...infrastructure.logging import get_logger
from ..chunk.schemas import ChunkCreate
from ..chunk.services import ChunkService
from ..chunking import chunk_words, normalize_whitespace
from ..common.exceptions import (
    ChunkingProducedNothingError,
    EmbeddingError,
    EmptyExtractionError,
    FileTooLargeError,
    StoreInconsistencyError,
    TooManyChunksError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from ..document.models import Document
from ..document.services import DocumentService
from ..extraction import ExtractionStatus, extract_text
from .schemas import IngestResult, UploadedFile

logger = get_logger(__name__)


async def _embed_one(provider: EmbeddingProvider, index: int, text: str) -> List[float]:
    try:
        vector = await provider.embed_text(text)
    except Exception as e:
        raise EmbeddingError(f"Embedding failed for chunk {index}: {e}") from e

    if vector is None or len(vector) == 0:
        raise EmbeddingError(f"Embedding response missing values for chunk {index}")

    return [float(value) for value in vector]


async def embed_chunks(
    provider: EmbeddingProvider,
    chunks: Sequence[str],
    concurrency: int = 1,
) -> List[List[float]]:
    """Embed every chunk, returning vectors in chunk order.

    The first failure aborts the whole batch with ``EmbeddingError``; there is
    no retry.

    Args:
        provider: Embedding provider
        chunks: Chunk texts in ordinal order
        concurrency: Maximum calls in flight; 1 embeds strictly one at a time
    """
    if concurrency <= 1:
        vectors: List[List[float]] = []
        for index, chunk in enumerate(chunks):
            vectors.append(await _embed_one(provider, index, chunk))
        return vectors

    # Calls finish out of order: each vector is written to its chunk's slot so
    # ordinal order is restored before anything reaches storage.
    semaphore = asyncio.Semaphore(concurrency)
    slots: List[Optional[List[float]]] = [None] * len(chunks)

    async def worker(index: int, chunk: str) -> None:
        async with semaphore:
            slots[index] = await _embed_one(provider, index, chunk)

    tasks = [asyncio.create_task(worker(index, chunk)) for index, chunk in enumerate(chunks)]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return [vector for vector in slots if vector is not None]


class IngestionService:
    """Turns an uploaded document into stored, embedded chunks.

    The pipeline is request-scoped and sequential. Nothing touches the
    database until every chunk has an embedding; the store step then finds or
    creates the document, replaces its chunks and commits once, so a failed
    ingestion leaves the previous version of the document intact.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        settings: Optional[Settings] = None,
        document_service: Optional[DocumentService] = None,
        chunk_service: Optional[ChunkService] = None,
    ):
        self.embedding_provider = embedding_provider
        self.settings = settings or get_settings()
        self.document_service = document_service or DocumentService()
        self.chunk_service = chunk_service or ChunkService()

    async def ingest(
        self,
        upload: UploadedFile,
        title: Optional[str],
        source: Optional[str],
        db: AsyncSession,
    ) -> IngestResult:
        """Ingest one document.

        Args:
            upload: File bytes, filename and declared media type
            title: Document title (required, trimmed)
            source: Optional source label (trimmed, blank means none)
            db: Database session

        Returns:
            IngestResult with the document id and number of chunks stored

        Raises:
            ValidationError: Missing title or empty upload
            FileTooLargeError: Upload above ``KB_MAX_FILE_BYTES``
            UnsupportedMediaTypeError: No extractor for the media type
            EmptyExtractionError: No readable text in the document
            ChunkingProducedNothingError: Text present but no chunks
            TooManyChunksError: More chunks needed than ``KB_MAX_CHUNKS``
            EmbeddingError: An embedding call failed
            StoreInconsistencyError: Chunk and embedding counts diverged
        """
        clean_title, clean_source = self._validate(upload, title, source)

        extraction = await anyio.to_thread.run_sync(extract_text, upload.data, upload.media_type, upload.filename)
        if extraction.status == ExtractionStatus.UNSUPPORTED_MEDIA_TYPE:
            raise UnsupportedMediaTypeError()
        if extraction.status == ExtractionStatus.EMPTY:
            raise EmptyExtractionError()

        normalized = normalize_whitespace(extraction.text)
        if not normalized:
            raise EmptyExtractionError()

        plan = chunk_words(
            normalized,
            max_words=self.settings.KB_CHUNK_WORDS,
            overlap_words=self.settings.KB_CHUNK_OVERLAP,
            max_chunks=self.settings.KB_MAX_CHUNKS,
        )
        if plan.truncated:
            raise TooManyChunksError(required=plan.required_chunks, limit=self.settings.KB_MAX_CHUNKS)
        if not plan.chunks:
            raise ChunkingProducedNothingError()

        logger.info(
            f"Ingesting '{clean_title}'",
            extra={
                "kind": extraction.kind.value if extraction.kind else None,
                "word_count": plan.word_count,
                "chunk_count": len(plan.chunks),
                "embedding_model": self.embedding_provider.model_name,
            },
        )

        try:
            embeddings = await embed_chunks(
                self.embedding_provider, plan.chunks, concurrency=self.settings.KB_EMBED_CONCURRENCY
            )
        except EmbeddingError as e:
            logger.error(f"Embedding failed while ingesting '{clean_title}': {e}")
            raise

        if len(embeddings) != len(plan.chunks):
            raise StoreInconsistencyError(
                f"Embedding count mismatch: {len(plan.chunks)} chunks, {len(embeddings)} embeddings"
            )

        chunk_creates = [
            ChunkCreate(chunk_index=index, content=content, embedding=embedding)
            for index, (content, embedding) in enumerate(zip(plan.chunks, embeddings))
        ]

        result = await self.store_batch(clean_title, clean_source, chunk_creates, db)
        logger.info(
            f"Ingested '{clean_title}'",
            extra={"document_id": str(result.document_id), "chunks_inserted": result.chunks_inserted},
        )
        return result

    async def store_batch(
        self,
        title: str,
        source: Optional[str],
        chunks: Sequence[ChunkCreate],
        db: AsyncSession,
    ) -> IngestResult:
        """Replace a document's chunks with a verified batch in one transaction.

        Finds the document by ``(title, source)`` or creates it, deletes its
        old chunks, inserts the new ones and commits. Any failure rolls the
        whole transaction back.
        """
        try:
            document = await self._claim_document(title, source, db)
            document_id = document.id
            inserted = await self.chunk_service.insert_chunks(document_id, chunks, db)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        return IngestResult(document_id=document_id, chunks_inserted=inserted)

    async def _claim_document(self, title: str, source: Optional[str], db: AsyncSession) -> Document:
        """Return the document for ``(title, source)`` with its old chunks removed.

        If another ingestion creates the same document between our lookup and
        our insert, the unique constraint rejects the second row. The
        transaction holds no other writes at that point, so it is rolled back
        and the winner's row is reused instead.
        """
        document = await self.document_service.find_document(title, source, db)
        if document is None:
            try:
                return await self.document_service.create_document(title, source, db)
            except IntegrityError:
                await db.rollback()
                logger.info(f"Document '{title}' was created concurrently; replacing its chunks")
                document = await self.document_service.find_document(title, source, db)
                if document is None:
                    raise

        await self.chunk_service.delete_chunks(document.id, db)
        await self.document_service.touch_document(document, db)
        return document

    def _validate(self, upload: UploadedFile, title: Optional[str], source: Optional[str]) -> tuple[str, Optional[str]]:
        if upload.size == 0:
            raise ValidationError("Uploaded file is empty")

        if upload.size > self.settings.KB_MAX_FILE_BYTES:
            raise FileTooLargeError(size=upload.size, limit=self.settings.KB_MAX_FILE_BYTES)

        clean_title = title.strip() if title else ""
        if not clean_title:
            raise ValidationError("Missing 'title' value")

        clean_source = source.strip() if source else ""
        return clean_title, clean_source or None
