"""Embedding infrastructure for text-to-vector conversion."""

from .service import EmbeddingProvider, EmbeddingService, get_embedding_service

__all__ = ["EmbeddingProvider", "EmbeddingService", "get_embedding_service"]
