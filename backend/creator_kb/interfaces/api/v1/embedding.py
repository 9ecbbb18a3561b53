"""Embedding model information endpoint."""

from fastapi import APIRouter, Depends

from ....modules.embedding.schemas import EmbeddingInfo
from ....modules.embedding.services import EmbeddingInfoService
from ..dependencies import get_embedding_info_service

router = APIRouter(prefix="/embedding", tags=["Embedding"])


@router.get(
    "/info",
    summary="Get Embedding Model Information",
    description="""Get information about the embedding model used for ingestion and search.

    Returns the model name, the embedding dimension and whether the model has
    been loaded yet (it loads lazily on first use).
    """,
    responses={
        200: {"description": "Embedding model information returned successfully"},
    },
)
async def get_embedding_info(service: EmbeddingInfoService = Depends(get_embedding_info_service)) -> EmbeddingInfo:
    """Get information about the embedding model."""
    return await service.get_embedding_info()
