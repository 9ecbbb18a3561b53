"""Embedding model introspection."""

from ...infrastructure.embedding import EmbeddingService
from .schemas import EmbeddingInfo


class EmbeddingInfoService:
    """Reports which embedding model the ingestion pipeline uses."""

    def __init__(self, embedding_service: EmbeddingService):
        self.embedding_service = embedding_service

    async def get_embedding_info(self) -> EmbeddingInfo:
        """Get information about the embedding model."""
        is_loaded = await self.embedding_service.is_loaded()

        return EmbeddingInfo(
            model_name=self.embedding_service.model_name,
            dimension=self.embedding_service.embedding_dimension,
            is_loaded=is_loaded,
        )
