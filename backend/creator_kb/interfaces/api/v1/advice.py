"""Onboarding advice endpoint."""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from ....modules.advice.schemas import AdviceRead, AdviceRequest
from ....modules.advice.services import AdviceService
from ..dependencies import DbSession, get_advice_service

router = APIRouter(prefix="/advice", tags=["Advice"])


@router.post(
    "",
    summary="Get Random Advice",
    description="""
    Returns one random excerpt from the advice document.

    Pass the ids of excerpts already shown in **used_ids** to avoid repeats.
    Entries that are not numeric are ignored.
    """,
    responses={
        200: {"description": "An advice excerpt"},
        404: {"description": "Advice document missing, or every excerpt already used"},
    },
)
async def get_advice(
    db: DbSession,
    service: Annotated[AdviceService, Depends(get_advice_service)],
    request: Annotated[Optional[AdviceRequest], Body()] = None,
) -> AdviceRead:
    """Serve a random advice excerpt."""
    used_ids = request.used_ids if request is not None else []
    return await service.select_advice_chunk(used_ids, db)
