import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import ARRAY, JSON, DateTime, Float, Uuid
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column

# Native float arrays on PostgreSQL, JSON lists on backends without ARRAY (SQLite in tests).
EmbeddingVector = ARRAY(Float).with_variant(JSON(), "sqlite")


class UUIDMixin(MappedAsDataclass):
    """Mixin adding a client-generated UUID primary key named ``id``.

    The UUID is produced by ``uuid4()`` on the Python side so the identifier
    is known right after ``flush()`` on every backend. The field is excluded
    from the dataclass ``__init__``.

    Example:
        ```python
        class Document(Base, UUIDMixin):
            __tablename__ = "documents"
            title: Mapped[str] = mapped_column(String(500))

        document = Document(title="Playbook")
        # document.id is assigned on flush
        ```
    """

    id: Mapped[uuid_pkg.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid_pkg.uuid4,
        init=False,
    )


class TimestampMixin(MappedAsDataclass):
    """Mixin for adding created_at and updated_at timestamp columns.

    Both timestamps are timezone-aware UTC values and excluded from
    dataclass initialization. ``updated_at`` is not touched automatically on
    UPDATE; services that reuse a row (re-ingestion) set it explicitly.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        init=False,
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=True,
        init=False,
    )
