"""Ledger Snapshot ORM — one row per named ledger holding its durable state.

Invariants:
    - name is the primary key (one ledger per name)
    - owner mirrors snapshot["owner"] and never changes after the first save
    - snapshot holds the two maps and the id counter as produced by ledger_to_snapshot
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from orderledger.db.base import Base


class LedgerSnapshotRecord(Base):
    """Persisted ledger state, keyed by ledger name."""
    __tablename__ = "ledger_snapshots"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    owner: Mapped[str] = mapped_column(String(100), nullable=False)
    snapshot: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
