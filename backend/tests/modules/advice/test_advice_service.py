"""Tests for advice selection."""

import random

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from creator_kb.modules.advice import AdviceRequest, AdviceService
from creator_kb.modules.common.exceptions import AdviceExhaustedError, SourceNotConfiguredError
from creator_kb.modules.document.models import Document


@pytest.fixture
def advice_service(test_settings):
    return AdviceService(settings=test_settings, rng=random.Random(7))


@pytest.mark.asyncio
async def test_select_returns_formatted_non_blank_chunk(
    advice_service: AdviceService, db_session: AsyncSession, advice_document: dict
):
    advice = await advice_service.select_advice_chunk([], db_session)

    assert advice.id in advice_document["chunk_ids"]
    assert advice.id != advice_document["blank_chunk_id"]
    assert advice.text in {
        "Post consistently at the same time every week.",
        "Reply to every comment in the first hour.",
        "Collaborate with creators slightly larger than you.",
    }


@pytest.mark.asyncio
async def test_excluded_ids_are_never_served(
    advice_service: AdviceService, db_session: AsyncSession, advice_document: dict
):
    first, second, _, fourth = advice_document["chunk_ids"]

    for _ in range(10):
        advice = await advice_service.select_advice_chunk([first, fourth], db_session)
        assert advice.id == second


@pytest.mark.asyncio
async def test_exhausted_when_everything_is_excluded(
    advice_service: AdviceService, db_session: AsyncSession, advice_document: dict
):
    with pytest.raises(AdviceExhaustedError):
        await advice_service.select_advice_chunk(advice_document["chunk_ids"], db_session)


@pytest.mark.asyncio
async def test_source_not_configured(advice_service: AdviceService, db_session: AsyncSession):
    db_session.add(Document(title="Unrelated handbook"))
    await db_session.commit()

    with pytest.raises(SourceNotConfiguredError):
        await advice_service.select_advice_chunk([], db_session)


@pytest.mark.asyncio
async def test_title_prefix_match_is_case_insensitive(
    test_settings, db_session: AsyncSession, advice_document: dict
):
    settings = test_settings.model_copy(update={"ADVICE_DOCUMENT_TITLE": test_settings.ADVICE_DOCUMENT_TITLE.upper()})
    service = AdviceService(settings=settings, rng=random.Random(1))

    advice = await service.select_advice_chunk([], db_session)

    assert advice.id in advice_document["chunk_ids"]


@pytest.mark.asyncio
async def test_candidate_limit_bounds_the_pool(test_settings, db_session: AsyncSession, advice_document: dict):
    settings = test_settings.model_copy(update={"ADVICE_CANDIDATE_LIMIT": 1})
    service = AdviceService(settings=settings, rng=random.Random(3))

    advice = await service.select_advice_chunk([], db_session)

    assert advice.id == advice_document["chunk_ids"][0]


@pytest.mark.asyncio
async def test_seeded_rng_is_reproducible(test_settings, db_session: AsyncSession, advice_document: dict):
    picks_a = [
        (await AdviceService(settings=test_settings, rng=random.Random(42)).select_advice_chunk([], db_session)).id
        for _ in range(3)
    ]
    picks_b = [
        (await AdviceService(settings=test_settings, rng=random.Random(42)).select_advice_chunk([], db_session)).id
        for _ in range(3)
    ]

    assert picks_a == picks_b


class TestAdviceRequest:
    def test_defaults_to_empty(self):
        assert AdviceRequest().used_ids == []

    def test_accepts_camel_case_key(self):
        assert AdviceRequest.model_validate({"usedIds": [1, 2]}).used_ids == [1, 2]

    def test_lenient_parsing(self):
        request = AdviceRequest.model_validate({"used_ids": [1, "2", " 3 ", 4.0, 5.5, "x", None, True, {"id": 6}]})

        assert request.used_ids == [1, 2, 3, 4]

    def test_non_list_is_ignored(self):
        assert AdviceRequest.model_validate({"used_ids": "1,2"}).used_ids == []
