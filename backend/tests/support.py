"""Shared test helpers."""

import hashlib
from typing import List, Optional, Set

ADVICE_TITLE = "Social Media Marketing Mastery_ 500+ Strategic Tips"


def make_words(count: int, prefix: str = "word") -> str:
    """Space separated, individually identifiable words."""
    return " ".join(f"{prefix}{i}" for i in range(count))


class FakeEmbeddingProvider:
    """Deterministic embedding provider: vectors are derived from a hash of the text."""

    def __init__(self, dimension: int = 16, model_name: str = "fake-embedding", fail_on: Optional[Set[int]] = None):
        self.model_name = model_name
        self.dimension = dimension
        self.fail_on = fail_on or set()
        self.calls: List[str] = []

    @property
    def embedding_dimension(self) -> int:
        return self.dimension

    async def embed_text(self, text: str) -> List[float]:
        call_number = len(self.calls)
        self.calls.append(text)
        if call_number in self.fail_on:
            raise RuntimeError("embedding backend unavailable")
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [byte / 255.0 + 0.01 for byte in digest[: self.dimension]]

    async def is_loaded(self) -> bool:
        return True
