"""Semantic search over stored chunk embeddings."""

import uuid as uuid_pkg
from typing import List, Optional, Sequence

import numpy as np
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.embedding import EmbeddingProvider
from ...infrastructure.logging import get_logger
from ..chunk.models import Chunk
from ..common.exceptions import EmbeddingError, ResourceNotFoundError, ValidationError
from ..document.services import DocumentService
from .schemas import SearchHit, SearchResponse

logger = get_logger(__name__)


def cosine_similarities(query: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of ``query`` against every row of ``matrix``.

    Rows or queries with zero magnitude score 0.0.

    Args:
        query: Query vector of dimension d
        matrix: Array of shape (n, d)

    Returns:
        Array of n similarity scores
    """
    query_vec = np.asarray(query, dtype=np.float64)
    if matrix.size == 0:
        return np.zeros(0, dtype=np.float64)

    dots = matrix @ query_vec
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query_vec)

    scores = np.zeros_like(dots)
    nonzero = norms > 0
    scores[nonzero] = dots[nonzero] / norms[nonzero]
    return scores


class SearchService:
    """Linear-scan k-nearest-neighbour search used for chat grounding.

    Every candidate chunk is scored against the query embedding; there is no
    approximate index. Results are exact and ordered by descending cosine
    similarity, ties broken by chunk order.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        document_service: Optional[DocumentService] = None,
    ):
        self.embedding_provider = embedding_provider
        self.document_service = document_service or DocumentService()

    async def search(
        self,
        query: str,
        k: int,
        db: AsyncSession,
        document_title: Optional[str] = None,
    ) -> SearchResponse:
        """Find the ``k`` chunks most similar to ``query``.

        Args:
            query: Search text
            k: Number of results to return
            db: Database session
            document_title: Optional title prefix limiting the search to one document

        Returns:
            SearchResponse with ranked hits

        Raises:
            ValidationError: Blank query or non-positive k
            ResourceNotFoundError: No document matches ``document_title``
            EmbeddingError: The query could not be embedded
        """
        query = query.strip()
        if not query:
            raise ValidationError("Query cannot be blank")
        if k < 1:
            raise ValidationError("k must be at least 1")

        document_id: Optional[uuid_pkg.UUID] = None
        if document_title:
            document = await self.document_service.find_document_by_title_prefix(document_title, db)
            if document is None:
                raise ResourceNotFoundError(f"No document matches title '{document_title}'")
            document_id = document.id

        try:
            query_embedding = await self.embedding_provider.embed_text(query)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e

        if not query_embedding:
            raise EmbeddingError("Embedding response missing values for query")

        stmt = select(Chunk.id, Chunk.document_id, Chunk.chunk_index, Chunk.content, Chunk.embedding).order_by(
            Chunk.document_id, Chunk.chunk_index
        )
        if document_id is not None:
            stmt = stmt.where(Chunk.document_id == document_id)

        result = await db.execute(stmt)
        rows = [row for row in result.all() if row.embedding and len(row.embedding) == len(query_embedding)]

        if not rows:
            return SearchResponse(query=query, results=[], total_candidates=0)

        matrix = np.asarray([row.embedding for row in rows], dtype=np.float64)
        scores = cosine_similarities(query_embedding, matrix)
        top = np.argsort(-scores, kind="stable")[:k]

        hits: List[SearchHit] = [
            SearchHit(
                chunk_id=rows[i].id,
                document_id=rows[i].document_id,
                chunk_index=rows[i].chunk_index,
                content=rows[i].content,
                similarity_score=float(scores[i]),
            )
            for i in top
        ]

        logger.debug(f"Search returned {len(hits)} of {len(rows)} candidates")
        return SearchResponse(query=query, results=hits, total_candidates=len(rows))
