"""API tests for the ingestion endpoint."""

import zlib

import pytest
from httpx import AsyncClient

from support import make_words


def pdf_with_text(text: str) -> bytes:
    body = zlib.compress(f"BT /F1 12 Tf ({text}) Tj ET".encode("latin-1"))
    return b"%PDF-1.4\n1 0 obj\n<< /Filter /FlateDecode >>\nstream\n" + body + b"\nendstream\nendobj\n%%EOF\n"


class TestIngestAPI:
    """API tests for POST /api/v1/kb/ingest."""

    @pytest.mark.asyncio
    async def test_ingest_text_file(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/kb/ingest",
            files={"file": ("playbook.txt", make_words(900).encode(), "text/plain")},
            data={"title": "Playbook", "source": "handbook"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["chunks_inserted"] == 4
        assert "document_id" in data

    @pytest.mark.asyncio
    async def test_ingest_pdf(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/kb/ingest",
            files={"file": ("tips.pdf", pdf_with_text("Reply to every comment"), "application/pdf")},
            data={"title": "Tips"},
        )

        assert response.status_code == 200
        assert response.json()["chunks_inserted"] == 1

    @pytest.mark.asyncio
    async def test_reingest_reuses_document(self, client: AsyncClient):
        files = {"file": ("playbook.txt", make_words(300).encode(), "text/plain")}

        first = await client.post("/api/v1/kb/ingest", files=files, data={"title": "Playbook"})
        second = await client.post("/api/v1/kb/ingest", files=files, data={"title": "Playbook", "source": "  "})

        assert first.json()["document_id"] == second.json()["document_id"]

        detail = await client.get(f"/api/v1/documents/{first.json()['document_id']}")
        assert detail.json()["chunk_count"] == 2

    @pytest.mark.asyncio
    async def test_missing_file(self, client: AsyncClient):
        response = await client.post("/api/v1/kb/ingest", data={"title": "Playbook"})

        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    @pytest.mark.asyncio
    async def test_missing_title(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/kb/ingest", files={"file": ("a.txt", b"some words", "text/plain")}, data={"title": " "}
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing 'title' value", "kind": "validation_error"}

    @pytest.mark.asyncio
    async def test_empty_file(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/kb/ingest", files={"file": ("a.txt", b"", "text/plain")}, data={"title": "Empty"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Uploaded file is empty"

    @pytest.mark.asyncio
    async def test_file_too_large(self, client: AsyncClient, test_settings):
        payload = b"x" * (test_settings.KB_MAX_FILE_BYTES + 1)

        response = await client.post(
            "/api/v1/kb/ingest", files={"file": ("big.txt", payload, "text/plain")}, data={"title": "Big"}
        )

        assert response.status_code == 413
        assert response.json()["kind"] == "file_too_large"

    @pytest.mark.asyncio
    async def test_unsupported_media_type(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/kb/ingest", files={"file": ("cover.png", b"\x89PNG\r\n", "image/png")}, data={"title": "Cover"}
        )

        assert response.status_code == 415
        assert response.json()["kind"] == "unsupported_media_type"

    @pytest.mark.asyncio
    async def test_blank_document(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/kb/ingest", files={"file": ("blank.txt", b"  \n\n  ", "text/plain")}, data={"title": "Blank"}
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "empty_extraction"

    @pytest.mark.asyncio
    async def test_too_many_chunks(self, client: AsyncClient, test_settings):
        test_settings.KB_MAX_CHUNKS = 2

        response = await client.post(
            "/api/v1/kb/ingest",
            files={"file": ("long.txt", make_words(900).encode(), "text/plain")},
            data={"title": "Long"},
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "too_many_chunks"

        listing = await client.get("/api/v1/documents")
        assert listing.json()["total_count"] == 0

    @pytest.mark.asyncio
    async def test_embedding_failure(self, client: AsyncClient, fake_embedder):
        fake_embedder.fail_on = {0}

        response = await client.post(
            "/api/v1/kb/ingest",
            files={"file": ("notes.txt", make_words(100).encode(), "text/plain")},
            data={"title": "Notes"},
        )

        assert response.status_code == 502
        assert response.json()["kind"] == "embedding_error"

    @pytest.mark.asyncio
    async def test_correlation_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-789"})

        assert response.status_code == 200
        assert response.headers["X-Correlation-ID"] == "req-789"
