"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, provider client mock, sample documents
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock

import pytest

from docchat.boundary.provider.client import ProviderClient
from docchat.core.documents import UploadedDocument


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from docchat.boundary.db.base import Base
    from docchat.boundary.db.models import SessionModel  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def mock_provider() -> AsyncMock:
    """
    Create mock ProviderClient for testing.

    Every create call returns a fixed ID and every vector store is empty
    unless a test overrides it.

    Returns:
        AsyncMock: Mocked ProviderClient with async methods
    """
    provider = AsyncMock(spec=ProviderClient)
    provider.create_vector_store.return_value = "vs_1"
    provider.create_assistant.return_value = "asst_1"
    provider.create_thread.return_value = "thread_1"
    provider.list_vector_store_file_ids.return_value = []
    return provider


@pytest.fixture
def sample_documents() -> list[UploadedDocument]:
    """Provide two valid uploaded documents."""
    return [
        UploadedDocument(filename="lecture.pdf", content=b"%PDF-1.4\ntest content"),
        UploadedDocument(filename="notes.md", content=b"# Notes\n"),
    ]
