"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
import strawberry
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.dbmodels import Base


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_session() -> AsyncMock:
    """An AsyncSession double; add() is sync, everything awaited is AsyncMock."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_info(mock_session: AsyncMock) -> MagicMock:
    """Create a mock GraphQL info object carrying a session in its context."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": MagicMock(), "session": mock_session}
    return info


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """A real session on a fresh in-memory SQLite database built from the models."""
    from postboard.database.connection import (
        dispose_database,
        get_async_engine,
        get_async_session,
        init_database,
    )

    init_database("sqlite://", force_reinit=True)
    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_async_session() as session:
        yield session

    await dispose_database()


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """URL of a SQLite file that exists only for this test."""
    return f"sqlite:///{tmp_path / 'postboard.db'}"


@pytest.fixture
def migrated_database(sqlite_url: str) -> Generator[str, None, None]:
    """Run Alembic upgrade to head against a temporary SQLite file."""
    from postboard.database.connection import init_database, reset_database
    from postboard.database.migrations import run_migrations

    run_migrations("head", sqlite_url)
    reset_database()
    init_database(sqlite_url, force_reinit=True)
    yield sqlite_url
    reset_database()


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
