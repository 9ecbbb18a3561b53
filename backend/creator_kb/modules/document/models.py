"""SQLAlchemy models for document entities."""

from typing import Optional

from sqlalchemy import Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin, UUIDMixin
from ...infrastructure.database.session import Base


class Document(Base, UUIDMixin, TimestampMixin):
    """An ingested knowledge-base document.

    A document is identified by its ``(title, source)`` pair, with a missing
    source stored as NULL. Re-ingesting the same pair reuses the row and
    replaces all of its chunks.

    The unique constraint alone lets several NULL-source rows share a title,
    so a partial unique index covers that case.
    """

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("title", "source", name="uq_documents_title_source"),
        Index(
            "uq_documents_title_null_source",
            "title",
            unique=True,
            postgresql_where=text("source IS NULL"),
            sqlite_where=text("source IS NULL"),
        ),
    )

    title: Mapped[str] = mapped_column(String(500), index=True)
    source: Mapped[Optional[str]] = mapped_column(String(500), default=None)
