"""Shared database fixtures.

Repository tests run against an in-memory SQLite database with foreign
key enforcement switched on, so cascade and restrict rules behave as in
production.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from ledger.core.database import Base, enable_sqlite_foreign_keys
from ledger.core.seed import seed_reference_data
import ledger.models  # noqa: F401


# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create a test database engine."""
    engine = enable_sqlite_foreign_keys(
        create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        yield session


@pytest.fixture
async def seeded_session(test_session):
    """A session over a store loaded with the reference data."""
    await seed_reference_data(test_session)
    yield test_session
