"""Schemas for embedding model information."""

from pydantic import BaseModel, Field


class EmbeddingInfo(BaseModel):
    """Information about the embedding model."""

    model_name: str = Field(description="Name of the embedding model")
    dimension: int = Field(description="Embedding dimension")
    is_loaded: bool = Field(description="Whether the model is loaded in memory")
