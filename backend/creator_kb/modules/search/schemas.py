import uuid as uuid_pkg
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """Request for semantic search over stored chunks."""

    query: str = Field(..., min_length=1, description="Text to search for")
    k: int = Field(default=5, ge=1, le=50, description="Number of results to return")
    document_title: Optional[str] = Field(
        default=None, description="Restrict the search to the document whose title starts with this value"
    )

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query cannot be blank")
        return value.strip()


class SearchHit(BaseModel):
    """A single search result with its similarity score."""

    chunk_id: int
    document_id: uuid_pkg.UUID
    chunk_index: int
    content: str
    similarity_score: float


class SearchResponse(BaseModel):
    """Response from a semantic search."""

    query: str
    results: List[SearchHit]
    total_candidates: int
