"""Semantic search over stored chunks."""

from .schemas import SearchHit, SearchRequest, SearchResponse
from .services import SearchService, cosine_similarities

__all__ = ["SearchHit", "SearchRequest", "SearchResponse", "SearchService", "cosine_similarities"]
