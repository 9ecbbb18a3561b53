"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.database import async_session
from ...infrastructure.embedding import EmbeddingService, get_embedding_service
from ...modules.advice.services import AdviceService
from ...modules.chunk.services import ChunkService
from ...modules.document.services import DocumentService
from ...modules.embedding.services import EmbeddingInfoService
from ...modules.ingestion.services import IngestionService
from ...modules.search.services import SearchService

DbSession = Annotated[AsyncSession, Depends(async_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
Embedder = Annotated[EmbeddingService, Depends(get_embedding_service)]


def get_document_service() -> DocumentService:
    """Dependency for providing a DocumentService instance."""
    return DocumentService()


def get_chunk_service() -> ChunkService:
    """Dependency for providing a ChunkService instance."""
    return ChunkService()


def get_ingestion_service(embedder: Embedder, settings: AppSettings) -> IngestionService:
    """Dependency for providing an IngestionService wired to the process embedding model."""
    return IngestionService(embedding_provider=embedder, settings=settings)


def get_advice_service(settings: AppSettings) -> AdviceService:
    """Dependency for providing an AdviceService instance."""
    return AdviceService(settings=settings)


def get_search_service(embedder: Embedder) -> SearchService:
    """Dependency for providing a SearchService instance."""
    return SearchService(embedding_provider=embedder)


def get_embedding_info_service(embedder: Embedder) -> EmbeddingInfoService:
    """Dependency for providing an EmbeddingInfoService instance."""
    return EmbeddingInfoService(embedder)
