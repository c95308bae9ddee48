"""
BizTime Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── sample_company_data / sample_invoice_data: consistent row data
    ├── db_engine: async engine on a scratch SQLite file with the full schema
    └── test_client: HTTPX AsyncClient bound to the app, sessions from db_engine
"""

import os
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before biztime.config is imported anywhere
os.environ["LOG_LEVEL"] = "WARNING"

from biztime.database import Base, get_db_session  # noqa: E402
from biztime.models.company import Company  # noqa: E402,F401
from biztime.models.invoice import Invoice  # noqa: E402,F401


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_company(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = company
            result = await company_service.get_company(mock_db_session, "apple")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_company_data():
    return {
        "code": "apple",
        "name": "Apple Computer",
        "description": "Maker of OSX.",
    }


@pytest.fixture
def sample_invoice_data():
    return {
        "id": 1,
        "comp_code": "apple",
        "amt": 100.0,
        "paid": False,
        "add_date": date(2026, 1, 15),
        "paid_date": None,
    }


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Async engine on a throwaway SQLite file, schema created from the models.

    SQLite only enforces foreign keys (and ON DELETE CASCADE) when the
    pragma is enabled on every connection.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'biztime_test.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden with the same commit/rollback contract,
    backed by the scratch database.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/companies")
            assert response.status_code == 200
    """
    from biztime.main import app

    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
