"""Pydantic schemas for chunk entities."""

import uuid as uuid_pkg
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.schemas import TimestampSchema


class ChunkCreate(BaseModel):
    """One verified chunk/embedding pair ready for insertion."""

    chunk_index: Annotated[int, Field(ge=0)]
    content: Annotated[str, Field(min_length=1, description="Text content of the chunk")]
    embedding: Annotated[List[float], Field(description="Vector embedding representation")]

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Chunk content cannot be blank")
        return v

    @field_validator("embedding")
    @classmethod
    def validate_embedding(cls, v: List[float]) -> List[float]:
        if not v:
            raise ValueError("Embedding cannot be empty")
        return v


class ChunkRead(TimestampSchema):
    """Schema for reading chunk data (without the embedding vector)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    document_id: uuid_pkg.UUID
    chunk_index: int
    content: str


class ChunkListResponse(BaseModel):
    """Schema for paginated chunk list response."""

    data: List[ChunkRead]
    total_count: int
    has_more: bool
    page: int
    items_per_page: int
