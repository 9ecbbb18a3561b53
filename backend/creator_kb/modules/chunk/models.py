"""SQLAlchemy models for chunk entities."""

import uuid as uuid_pkg
from typing import List

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import EmbeddingVector, TimestampMixin
from ...infrastructure.database.session import Base


class Chunk(Base, TimestampMixin):
    """A word-window slice of a document's text with its embedding.

    ``chunk_index`` is the 0-based position in the document's chunk
    sequence; indexes are unique and contiguous per document.
    """

    __tablename__ = "chunks"
    __table_args__ = (UniqueConstraint("document_id", "chunk_index", name="uq_chunks_document_index"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    document_id: Mapped[uuid_pkg.UUID] = mapped_column(ForeignKey("documents.id", ondelete="CASCADE"), index=True)
    chunk_index: Mapped[int] = mapped_column(Integer)
    content: Mapped[str] = mapped_column(Text)
    embedding: Mapped[List[float]] = mapped_column(EmbeddingVector)
