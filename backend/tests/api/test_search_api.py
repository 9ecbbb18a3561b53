"""API tests for search and embedding info endpoints."""

import pytest
from httpx import AsyncClient

from support import make_words


class TestSearchAPI:
    @pytest.mark.asyncio
    async def test_search_returns_ranked_hits(self, client: AsyncClient):
        await client.post(
            "/api/v1/kb/ingest",
            files={"file": ("playbook.txt", make_words(500).encode(), "text/plain")},
            data={"title": "Playbook"},
        )

        response = await client.post("/api/v1/search", json={"query": "word1 word2", "k": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "word1 word2"
        assert len(data["results"]) == 1
        assert data["total_candidates"] == 3

    @pytest.mark.asyncio
    async def test_search_unknown_document(self, client: AsyncClient):
        response = await client.post("/api/v1/search", json={"query": "hooks", "document_title": "Missing"})

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    @pytest.mark.asyncio
    async def test_search_rejects_blank_query(self, client: AsyncClient):
        response = await client.post("/api/v1/search", json={"query": "   "})

        assert response.status_code == 422


class TestEmbeddingInfoAPI:
    @pytest.mark.asyncio
    async def test_embedding_info(self, client: AsyncClient, fake_embedder):
        response = await client.get("/api/v1/embedding/info")

        assert response.status_code == 200
        assert response.json() == {
            "model_name": fake_embedder.model_name,
            "dimension": fake_embedder.dimension,
            "is_loaded": True,
        }


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
