"""Document ingestion pipeline."""

from .schemas import IngestResult, UploadedFile
from .services import IngestionService, embed_chunks

__all__ = ["IngestResult", "IngestionService", "UploadedFile", "embed_chunks"]
