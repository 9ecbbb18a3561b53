"""Pydantic schemas for document entities."""

import uuid as uuid_pkg
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.schemas import TimestampSchema


class DocumentRead(TimestampSchema):
    """Schema for reading document data."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid_pkg.UUID
    title: str
    source: Optional[str] = None
    chunk_count: int = Field(default=0, description="Number of chunks stored for the document")


class DocumentListResponse(BaseModel):
    """Schema for paginated document list response."""

    data: List[DocumentRead]
    total_count: int
    has_more: bool
    page: int
    items_per_page: int
