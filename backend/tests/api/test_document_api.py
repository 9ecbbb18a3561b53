"""API tests for document inspection endpoints."""

import uuid

import pytest
from httpx import AsyncClient

from support import make_words


async def ingest(client: AsyncClient, title: str, words: int) -> str:
    response = await client.post(
        "/api/v1/kb/ingest",
        files={"file": (f"{title}.txt", make_words(words).encode(), "text/plain")},
        data={"title": title},
    )
    assert response.status_code == 200
    return response.json()["document_id"]


class TestDocumentAPI:
    """API tests for /api/v1/documents."""

    @pytest.mark.asyncio
    async def test_list_documents(self, client: AsyncClient):
        await ingest(client, "First", 100)
        await ingest(client, "Second", 500)

        response = await client.get("/api/v1/documents", params={"items_per_page": 10})

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 2
        assert {doc["title"]: doc["chunk_count"] for doc in data["data"]} == {"First": 1, "Second": 3}

    @pytest.mark.asyncio
    async def test_get_document(self, client: AsyncClient):
        document_id = await ingest(client, "Playbook", 900)

        response = await client.get(f"/api/v1/documents/{document_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == document_id
        assert data["title"] == "Playbook"
        assert data["source"] is None
        assert data["chunk_count"] == 4

    @pytest.mark.asyncio
    async def test_get_missing_document(self, client: AsyncClient):
        response = await client.get(f"/api/v1/documents/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    @pytest.mark.asyncio
    async def test_invalid_document_id(self, client: AsyncClient):
        response = await client.get("/api/v1/documents/not-a-uuid")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_chunks(self, client: AsyncClient):
        document_id = await ingest(client, "Playbook", 900)

        response = await client.get(f"/api/v1/documents/{document_id}/chunks", params={"items_per_page": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 4
        assert [chunk["chunk_index"] for chunk in data["data"]] == [0, 1, 2]
        assert data["has_more"] is True

    @pytest.mark.asyncio
    async def test_delete_document(self, client: AsyncClient):
        document_id = await ingest(client, "Playbook", 300)

        response = await client.delete(f"/api/v1/documents/{document_id}")
        assert response.status_code == 204

        response = await client.get(f"/api/v1/documents/{document_id}")
        assert response.status_code == 404

        response = await client.delete(f"/api/v1/documents/{document_id}")
        assert response.status_code == 404
