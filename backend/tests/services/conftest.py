"""Service test fixtures — async DB, ledger host, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database and a fresh ledger
    - get_ledger_host dependency overridden to use the test host
    - db_manager and ledger_host singletons patched for the readiness probe

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - db_manager built with __new__: skips pool arguments SQLite does not accept
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from orderledger.core.domain_types import Identity
from orderledger.db.base import Base
from orderledger.infrastructure.database import DatabaseSessionManager
from orderledger.infrastructure.snapshot_repository import SqlLedgerSnapshotRepository
from orderledger.services.ledger_host import LedgerHost, get_ledger_host
import orderledger.infrastructure.database as db_module
import orderledger.models  # noqa: F401
import orderledger.services.ledger_host as host_module
from orderledger.main import app

OWNER = Identity("0xowner")
LEDGER_NAME = "test"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def repository(test_manager):
    return SqlLedgerSnapshotRepository(test_manager)


@pytest.fixture
async def host(repository):
    return await LedgerHost.open(repository, LEDGER_NAME, OWNER)


@pytest.fixture
async def client(host, test_manager):
    """FastAPI test client with the ledger host overridden."""
    app.dependency_overrides[get_ledger_host] = lambda: host

    original_manager = db_module.db_manager
    original_host = host_module.ledger_host
    db_module.db_manager = test_manager
    host_module.ledger_host = host

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    host_module.ledger_host = original_host
