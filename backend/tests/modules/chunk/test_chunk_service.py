"""Tests for chunk service."""

import pytest
import pytest_asyncio
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from creator_kb.modules.chunk.schemas import ChunkCreate
from creator_kb.modules.chunk.services import ChunkService
from creator_kb.modules.document.services import DocumentService


@pytest.fixture
def chunk_service():
    """Create chunk service instance."""
    return ChunkService()


@pytest_asyncio.fixture
async def document_id(db_session: AsyncSession):
    document = await DocumentService().create_document("Playbook", None, db_session)
    await db_session.commit()
    return document.id


def make_chunks(count: int) -> list[ChunkCreate]:
    return [ChunkCreate(chunk_index=i, content=f"chunk {i}", embedding=[float(i), 1.0]) for i in range(count)]


@pytest.mark.asyncio
async def test_insert_and_list_in_order(chunk_service: ChunkService, db_session: AsyncSession, document_id):
    inserted = await chunk_service.insert_chunks(document_id, list(reversed(make_chunks(3))), db_session)
    await db_session.commit()

    chunks = await chunk_service.list_chunks(document_id, db_session)

    assert inserted == 3
    assert [chunk.chunk_index for chunk in chunks] == [0, 1, 2]
    assert chunks[2].embedding == [2.0, 1.0]


@pytest.mark.asyncio
async def test_list_chunks_respects_limit(chunk_service: ChunkService, db_session: AsyncSession, document_id):
    await chunk_service.insert_chunks(document_id, make_chunks(5), db_session)
    await db_session.commit()

    chunks = await chunk_service.list_chunks(document_id, db_session, limit=2)

    assert [chunk.chunk_index for chunk in chunks] == [0, 1]


@pytest.mark.asyncio
async def test_insert_nothing(chunk_service: ChunkService, db_session: AsyncSession, document_id):
    assert await chunk_service.insert_chunks(document_id, [], db_session) == 0


@pytest.mark.asyncio
async def test_delete_chunks(chunk_service: ChunkService, db_session: AsyncSession, document_id):
    await chunk_service.insert_chunks(document_id, make_chunks(4), db_session)
    await db_session.commit()

    deleted = await chunk_service.delete_chunks(document_id, db_session)
    await db_session.commit()

    assert deleted == 4
    assert await chunk_service.list_chunks(document_id, db_session) == []


@pytest.mark.asyncio
async def test_get_chunks_by_document_paginated(chunk_service: ChunkService, db_session: AsyncSession, document_id):
    await chunk_service.insert_chunks(document_id, make_chunks(5), db_session)
    await db_session.commit()

    result = await chunk_service.get_chunks_by_document(document_id, db_session, page=2, items_per_page=2)

    assert result["total_count"] == 5
    assert [chunk["chunk_index"] for chunk in result["data"]] == [2, 3]
    assert "embedding" not in result["data"][0]


class TestChunkCreate:
    def test_rejects_empty_embedding(self):
        with pytest.raises(PydanticValidationError):
            ChunkCreate(chunk_index=0, content="text", embedding=[])

    def test_rejects_blank_content(self):
        with pytest.raises(PydanticValidationError):
            ChunkCreate(chunk_index=0, content="   ", embedding=[1.0])

    def test_rejects_negative_index(self):
        with pytest.raises(PydanticValidationError):
            ChunkCreate(chunk_index=-1, content="text", embedding=[1.0])
