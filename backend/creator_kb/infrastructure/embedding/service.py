"""Embedding provider interface and the sentence-transformers implementation."""

import asyncio
from functools import lru_cache
from typing import List, Optional, Protocol, cast, runtime_checkable

from sentence_transformers import SentenceTransformer

from ..config.settings import get_settings
from ..logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Anything that turns one chunk of text into a vector.

    The ingestion pipeline and the search service only depend on this
    interface; tests pass in deterministic fakes.
    """

    model_name: str

    @property
    def embedding_dimension(self) -> int: ...

    async def embed_text(self, text: str) -> List[float]: ...


class EmbeddingService:
    """Generate embeddings in-process with a sentence-transformers model.

    Features:
    - Lazy model loading on first use, guarded by an asyncio lock
    - Encoding runs in a worker thread so the event loop stays responsive
    - Normalized output vectors, so cosine similarity is a dot product
    """

    def __init__(self, model_name: str = "all-mpnet-base-v2", dimension: int = 768):
        """Initialize embedding service.

        Args:
            model_name: HuggingFace model name for sentence transformers
            dimension: Output dimension reported before the model is loaded
        """
        self.model_name = model_name
        self._dimension = dimension
        self._model: Optional[SentenceTransformer] = None
        self._model_lock = asyncio.Lock()

    async def _get_model(self) -> SentenceTransformer:
        """Get model instance, loading it if necessary."""
        if self._model is None:
            async with self._model_lock:
                if self._model is None:
                    logger.info(f"Loading embedding model {self.model_name}")
                    self._model = cast(SentenceTransformer, await asyncio.to_thread(SentenceTransformer, self.model_name))
        if self._model is None:
            raise RuntimeError("Model failed to load")
        return self._model

    async def embed_text(self, text: str) -> List[float]:
        """Generate the embedding for a single text.

        Raises:
            ValueError: If text is blank
        """
        if not text.strip():
            raise ValueError("Text cannot be empty")

        model = await self._get_model()

        embedding = await asyncio.to_thread(
            model.encode,
            text,
            convert_to_tensor=False,
            normalize_embeddings=True,
        )

        return cast(List[float], embedding.tolist())

    @property
    def embedding_dimension(self) -> int:
        """Return the embedding dimension for this model."""
        if self._model is not None:
            dimension = self._model.get_sentence_embedding_dimension()
            if dimension:
                return int(dimension)
        return self._dimension

    async def is_loaded(self) -> bool:
        """Check if model is loaded."""
        return self._model is not None


@lru_cache()
def get_embedding_service() -> EmbeddingService:
    """Get the process-wide embedding service configured from settings."""
    settings = get_settings()
    return EmbeddingService(model_name=settings.KB_EMBED_MODEL, dimension=settings.KB_EMBED_DIMENSION)
