"""Schemas for the ingestion pipeline."""

import uuid as uuid_pkg
from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded payload as received from the HTTP layer or the CLI."""

    data: bytes
    filename: str = ""
    media_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


class IngestResult(BaseModel):
    """Outcome of a successful ingestion."""

    document_id: uuid_pkg.UUID = Field(description="Identifier of the created or reused document")
    chunks_inserted: int = Field(ge=0, description="Number of chunks stored for the document")
