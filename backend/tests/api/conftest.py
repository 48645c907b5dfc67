"""Fixtures for API tests."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from ledger.core.database import Base, enable_sqlite_foreign_keys, get_db
from ledger.core.seed import seed_reference_data
from ledger.main import app


async def _prepare(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await seed_reference_data(session)


@pytest.fixture
def api_engine(tmp_path):
    """A file-backed SQLite store holding the reference data.

    The test client runs the app on its own event loop, so connections are
    not pooled across loops.
    """
    engine = enable_sqlite_foreign_keys(
        create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )
    )
    asyncio.run(_prepare(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def client(api_engine):
    """Create a test client for the FastAPI app bound to the test store."""
    session_factory = sessionmaker(api_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_receipt():
    """A receipt for the seeded acrylic paint, in litres."""
    return {
        "date": "2025-11-20",
        "supplier_id": 1,
        "material_id": 5,
        "unit_of_measure_code": "литры",
        "quantity": "12.5",
        "unit_price": "550.50",
        "document_code": "ПРИХ4",
        "document_number": "131",
    }
