"""Random advice selection from the advice source document."""

import random
from typing import Collection, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.logging import get_logger
from ..chunk.services import ChunkService
from ..common.exceptions import AdviceExhaustedError, SourceNotConfiguredError
from ..document.services import DocumentService
from .formatter import format_advice_text
from .schemas import AdviceRead

logger = get_logger(__name__)


class AdviceService:
    """Serves one random excerpt from the configured advice document.

    The caller keeps track of which chunk ids it has already shown and passes
    them back on every request; nothing about that history is stored here.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        document_service: Optional[DocumentService] = None,
        chunk_service: Optional[ChunkService] = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random()
        self.document_service = document_service or DocumentService()
        self.chunk_service = chunk_service or ChunkService()

    async def select_advice_chunk(
        self,
        excluded_ids: Collection[int],
        db: AsyncSession,
    ) -> AdviceRead:
        """Pick a random non-blank chunk of the advice document.

        Args:
            excluded_ids: Chunk ids already served to the caller
            db: Database session

        Returns:
            The chunk id and its formatted excerpt

        Raises:
            SourceNotConfiguredError: No document matches the advice title prefix
            AdviceExhaustedError: Every candidate chunk is blank or excluded
        """
        document = await self.document_service.find_document_by_title_prefix(
            self.settings.ADVICE_DOCUMENT_TITLE, db
        )
        if document is None:
            raise SourceNotConfiguredError()

        chunks = await self.chunk_service.list_chunks(
            document.id, db, limit=self.settings.ADVICE_CANDIDATE_LIMIT
        )

        excluded = set(excluded_ids)
        available = [
            chunk
            for chunk in chunks
            if chunk.content and chunk.content.strip() and (not excluded or chunk.id not in excluded)
        ]

        if not available:
            logger.warning(
                "No advice chunks available",
                extra={"document_id": str(document.id), "total": len(chunks), "excluded": len(excluded)},
            )
            raise AdviceExhaustedError()

        choice = self.rng.choice(available)
        logger.info(
            "Serving advice chunk",
            extra={"chunk_id": choice.id, "chunk_index": choice.chunk_index},
        )

        return AdviceRead(id=choice.id, text=format_advice_text(choice.content))
