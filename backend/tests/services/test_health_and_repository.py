"""Health probes and the SQLAlchemy snapshot repository.

Invariants:
    - Liveness is always 200; readiness needs the database and a loaded ledger
    - Repository upserts by ledger name and returns None for unknown ledgers
    - Session errors from SQLAlchemy surface as DatabaseError with the failing operation
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from orderledger.core.errors import DatabaseError, NotFoundError
from orderledger.models.ledger_snapshot import LedgerSnapshotRecord
import orderledger.services.ledger_host as host_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database_and_ledger(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy", "ledger": "loaded"}


async def test_readiness_without_ledger(client):
    host_module.ledger_host = None
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "ledger_not_loaded"


async def test_load_unknown_ledger_returns_none(repository):
    assert await repository.load("missing") is None


async def test_save_then_load(repository):
    snapshot = {"owner": "0xowner", "next_order_id": 0, "profiles": {}, "orders": {}}
    await repository.save("main", snapshot)
    assert await repository.load("main") == snapshot


async def test_save_upserts_single_row(repository, test_session_factory):
    await repository.save("main", {"owner": "0xowner", "next_order_id": 0})
    await repository.save("main", {"owner": "0xowner", "next_order_id": 3})

    async with test_session_factory() as db:
        rows = (await db.execute(select(LedgerSnapshotRecord))).scalars().all()
    assert len(rows) == 1
    assert rows[0].snapshot["next_order_id"] == 3
    assert rows[0].owner == "0xowner"


@pytest.mark.parametrize("error, operation", [
    (IntegrityError("INSERT", {}, Exception("duplicate")), "commit"),
    (OperationalError("SELECT 1", {}, Exception("refused")), "execute"),
    (SQLAlchemyError("mapper misconfigured"), "unknown"),
])
async def test_session_maps_sqlalchemy_errors(test_manager, error, operation):
    with pytest.raises(DatabaseError) as exc_info:
        async with test_manager.session():
            raise error
    assert exc_info.value.operation == operation
    assert exc_info.value.http_status == 503


async def test_session_leaves_ledger_errors_alone(test_manager):
    with pytest.raises(NotFoundError):
        async with test_manager.session():
            raise NotFoundError("Profile", "0xalice")


async def test_health_check_reports_database(test_manager):
    assert await test_manager.health_check() is True
