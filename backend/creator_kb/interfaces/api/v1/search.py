"""Semantic search endpoint used for chat grounding."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ....modules.search.schemas import SearchRequest, SearchResponse
from ....modules.search.services import SearchService
from ..dependencies import DbSession, get_search_service

router = APIRouter(prefix="/search", tags=["Search"])


@router.post(
    "",
    summary="Semantic Search",
    description="""
    Returns the **k** stored chunks most similar to **query** by cosine
    similarity of their embeddings.

    - **document_title**: Optional title prefix restricting the search to one document
    """,
    responses={
        200: {"description": "Ranked search results"},
        404: {"description": "No document matches document_title"},
        502: {"description": "Query embedding failed"},
    },
)
async def search_chunks(
    search_request: SearchRequest,
    db: DbSession,
    service: Annotated[SearchService, Depends(get_search_service)],
) -> SearchResponse:
    """Search chunks by semantic similarity."""
    return await service.search(
        search_request.query,
        search_request.k,
        db,
        document_title=search_request.document_title,
    )
