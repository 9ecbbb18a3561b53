"""Whitespace normalization and overlapping word-window chunking."""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

MIN_CHUNK_WORDS = 50
MIN_NEW_WORDS = 10

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Flatten text into single-space separated words.

    Paragraph structure is discarded; chunking works on a flat word stream.
    """
    return _WHITESPACE_RE.sub(" ", text.replace("\r\n", "\n").strip())


def effective_window(max_words: int, overlap_words: int) -> Tuple[int, int]:
    """Clamp the configured window to ``(max_words, overlap)`` actually used.

    Chunks are never shorter than 50 words, and each chunk after the first
    brings at least 10 words the previous one did not have.
    """
    max_words = max(MIN_CHUNK_WORDS, max_words)
    overlap = min(max(0, overlap_words), max_words - MIN_NEW_WORDS)
    return max_words, overlap


@dataclass
class ChunkPlan:
    """Chunks produced for one text, with the word spans they cover."""

    chunks: List[str] = field(default_factory=list)
    spans: List[Tuple[int, int]] = field(default_factory=list)
    word_count: int = 0
    max_words: int = MIN_CHUNK_WORDS
    overlap: int = 0
    truncated: bool = False
    required_chunks: int = 0

    def __len__(self) -> int:
        return len(self.chunks)


def _window_spans(word_count: int, max_words: int, overlap: int, limit: int | None = None) -> List[Tuple[int, int]]:
    spans: List[Tuple[int, int]] = []
    start = 0

    while start < word_count:
        if limit is not None and len(spans) >= limit:
            break
        end = min(word_count, start + max_words)
        spans.append((start, end))
        if end >= word_count:
            break
        start = end - overlap
        if start <= 0:
            start = end

    return spans


def chunk_words(text: str, max_words: int, overlap_words: int, max_chunks: int) -> ChunkPlan:
    """Split text into overlapping word windows.

    Args:
        text: Normalized text
        max_words: Target words per chunk (floored at 50)
        overlap_words: Words shared with the previous chunk (clamped to ``[0, max_words - 10]``)
        max_chunks: Hard cap on the number of chunks produced

    Returns:
        ChunkPlan. ``truncated`` is set when the cap stopped the walk before
        the end of the text; callers must reject such a plan rather than store
        a partial document.
    """
    words = text.split()
    max_words, overlap = effective_window(max_words, overlap_words)
    plan = ChunkPlan(word_count=len(words), max_words=max_words, overlap=overlap)

    if not words:
        return plan

    plan.spans = _window_spans(len(words), max_words, overlap, limit=max(0, max_chunks))
    plan.chunks = [" ".join(words[start:end]) for start, end in plan.spans]
    plan.truncated = not plan.spans or plan.spans[-1][1] < len(words)
    plan.required_chunks = (
        len(_window_spans(len(words), max_words, overlap)) if plan.truncated else len(plan.spans)
    )

    return plan
