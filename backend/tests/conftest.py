"""Test configuration and fixtures for the creator knowledge base."""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# mypy: disable-error-code="import-untyped"
from testcontainers.core.docker_client import DockerClient
from testcontainers.postgres import PostgresContainer

from creator_kb.infrastructure.config.settings import Settings, get_settings
from creator_kb.infrastructure.database.session import Base, async_session
from creator_kb.infrastructure.embedding import get_embedding_service
from creator_kb.infrastructure.logging import configure_testing_logging, mark_logging_configured
from creator_kb.interfaces.main import app
from creator_kb.modules.chunk.models import Chunk
from creator_kb.modules.document.models import Document
from support import ADVICE_TITLE, FakeEmbeddingProvider

configure_testing_logging()
mark_logging_configured()

USE_POSTGRES = os.environ.get("KB_TEST_POSTGRES", "").lower() in ("1", "true", "yes")
SQLITE_URL = "sqlite+aiosqlite:///:memory:"


def is_docker_running() -> bool:
    """Check if Docker daemon is running."""
    try:
        DockerClient()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def pg_container():
    """Create a PostgreSQL container for testing."""
    if not is_docker_running():
        pytest.skip("Docker is required, but not running")

    with PostgresContainer() as pg:
        yield pg


@pytest.fixture(scope="function")
def test_db_url(request):
    """Database URL for the test engine: in-memory SQLite unless KB_TEST_POSTGRES is set."""
    if not USE_POSTGRES:
        return SQLITE_URL

    pg = request.getfixturevalue("pg_container")
    host = pg.get_container_host_ip()
    port = pg.get_exposed_port(5432)
    return f"postgresql+asyncpg://{pg.username}:{pg.password}@{host}:{port}/{pg.dbname}"


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(test_db_url):
    """Create a SQLAlchemy engine with a fresh schema."""
    if test_db_url.startswith("sqlite"):
        engine = create_async_engine(
            test_db_url, echo=False, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    else:
        engine = create_async_engine(test_db_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_db_engine):
    return async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    """Application settings with small, test-friendly limits."""
    return get_settings().model_copy(
        update={
            "KB_MAX_FILE_BYTES": 64 * 1024,
            "KB_CHUNK_WORDS": 260,
            "KB_CHUNK_OVERLAP": 40,
            "KB_MAX_CHUNKS": 120,
            "KB_EMBED_CONCURRENCY": 1,
            "ADVICE_DOCUMENT_TITLE": ADVICE_TITLE,
            "ADVICE_CANDIDATE_LIMIT": 750,
        }
    )


@pytest.fixture
def fake_embedder() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest_asyncio.fixture(scope="function")
async def client(session_factory, test_settings, fake_embedder):
    """Test client with each request on its own session, a fake embedder and test settings."""
    app.dependency_overrides = {}

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_embedding_service] = lambda: fake_embedder

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def advice_document(db_session: AsyncSession):
    """An advice document with three tips and one blank chunk."""
    document = Document(title=f"{ADVICE_TITLE} - Comprehensive Summary", source=None)
    db_session.add(document)
    await db_session.flush()

    contents = [
        "1. Post consistently at the same time every week.",
        "- Reply to every comment in the first hour.",
        "   ",
        "• Collaborate with creators slightly larger than you.",
    ]
    chunks = [
        Chunk(document_id=document.id, chunk_index=index, content=content, embedding=[0.1, 0.2, 0.3])
        for index, content in enumerate(contents)
    ]
    db_session.add_all(chunks)
    await db_session.commit()

    return {
        "id": document.id,
        "chunk_ids": [chunk.id for chunk in chunks],
        "blank_chunk_id": chunks[2].id,
    }
