"""Text normalization and chunking."""

from .text import ChunkPlan, chunk_words, effective_window, normalize_whitespace

__all__ = ["ChunkPlan", "chunk_words", "effective_window", "normalize_whitespace"]
