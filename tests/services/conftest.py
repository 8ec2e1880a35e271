"""Service test fixtures: file-backed SQLite catalog + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_store dependency overridden to use the test store
    - db_manager patched so the readiness probe sees the test database

Design Decisions:
    - File-backed SQLite rather than :memory:: handlers run concurrent lookups,
      each on its own connection, and every connection must see the same data
    - DatabaseSessionManager built via __new__: reuses the test engine, no pool args
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from locallibrary.db.base import Base
from locallibrary.infrastructure.catalog_store import CatalogStore, get_store
from locallibrary.infrastructure.database import DatabaseSessionManager
import locallibrary.infrastructure.database as db_module
import locallibrary.models  # noqa: F401
from locallibrary.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
def store(test_manager):
    return CatalogStore(test_manager)


@pytest.fixture
async def client(store, test_manager):
    """FastAPI test client with the store dependency overridden."""
    async def override_get_store():
        return store

    app.dependency_overrides[get_store] = override_get_store

    original_manager = db_module.db_manager
    db_module.db_manager = test_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
