"""Snapshot Repository — SQLAlchemy implementation of LedgerSnapshotRepository.

Invariants:
    - save() is an upsert keyed by ledger name, committed in its own session
    - load() returns None for a ledger that was never saved
    - SQLAlchemy failures surface as DatabaseError via DatabaseSessionManager
"""

from sqlalchemy import select

from orderledger.infrastructure.database import DatabaseSessionManager
from orderledger.models.ledger_snapshot import LedgerSnapshotRecord


class SqlLedgerSnapshotRepository:
    """Stores each ledger's snapshot as a single JSON row."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def load(self, name: str) -> dict | None:
        async with self._manager.session() as db:
            result = await db.execute(
                select(LedgerSnapshotRecord).where(LedgerSnapshotRecord.name == name),
            )
            record = result.scalar_one_or_none()
            return dict(record.snapshot) if record else None

    async def save(self, name: str, snapshot: dict) -> None:
        async with self._manager.session() as db:
            record = await db.get(LedgerSnapshotRecord, name)
            if record is None:
                db.add(LedgerSnapshotRecord(
                    name=name, owner=snapshot["owner"], snapshot=snapshot,
                ))
            else:
                record.snapshot = snapshot
            await db.commit()
