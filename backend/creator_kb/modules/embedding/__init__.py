"""Embedding model information."""

from .schemas import EmbeddingInfo
from .services import EmbeddingInfoService

__all__ = ["EmbeddingInfo", "EmbeddingInfoService"]
