"""Ledger Host — serializes engine calls, persists snapshots, publishes events.

Invariants:
    - One asyncio.Lock per host: exactly one engine call (plus its save) runs at a time
    - A mutating call is visible only after its snapshot is saved; any failure while
      saving (DatabaseError, serialization, cancellation) restores the engine to the
      pre-call snapshot and re-raises
    - Events are published (logged + appended to the host log) only after a successful save
    - The host log keeps the most recent PUBLISHED_EVENT_LIMIT events
    - Read-only calls never touch the repository

Design Decisions:
    - Impureim sandwich: pure engine call between lock acquisition and async IO
    - Module-level singleton initialized by the FastAPI lifespan, like db_manager
"""

import asyncio
import logging
from collections import deque
from typing import Callable, TypeVar

from orderledger.core.domain_types import Identity, OrderId, OrderState
from orderledger.core.ledger_engine import LedgerEngine
from orderledger.core.ledger_events import LedgerEvent
from orderledger.core.ledger_snapshot import ledger_from_snapshot, ledger_to_snapshot
from orderledger.core.ledger_state import Order
from orderledger.core.repository_protocols import LedgerSnapshotRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

PUBLISHED_EVENT_LIMIT = 1000


class LedgerHost:
    """Host environment for one named LedgerEngine."""

    def __init__(
        self,
        engine: LedgerEngine,
        repository: LedgerSnapshotRepository,
        name: str = "default",
    ):
        self._engine = engine
        self._repository = repository
        self._name = name
        self._lock = asyncio.Lock()
        self._published: deque[LedgerEvent] = deque(maxlen=PUBLISHED_EVENT_LIMIT)

    @classmethod
    async def open(
        cls, repository: LedgerSnapshotRepository, name: str, owner: str,
    ) -> "LedgerHost":
        """Load the stored ledger, or start an empty one owned by owner."""
        snapshot = await repository.load(name)
        if snapshot is None:
            logger.info("Starting new ledger", extra={"ledger": name, "identity": owner})
            return cls(LedgerEngine(Identity(owner)), repository, name)
        engine = ledger_from_snapshot(snapshot)
        if engine.owner != owner:
            logger.warning(
                "Configured owner ignored; stored ledger keeps its owner",
                extra={"ledger": name, "identity": engine.owner},
            )
        return cls(engine, repository, name)

    @property
    def owner(self) -> Identity:
        return self._engine.owner

    @property
    def events(self) -> tuple[LedgerEvent, ...]:
        return tuple(self._published)

    # --- Call plumbing -------------------------------------------------------

    async def _read(self, call: Callable[[LedgerEngine], T]) -> T:
        async with self._lock:
            return call(self._engine)

    async def _write(self, operation: str, call: Callable[[LedgerEngine], T]) -> T:
        async with self._lock:
            before = ledger_to_snapshot(self._engine)
            seen = len(self._engine.events)
            result = call(self._engine)
            new_events = self._engine.events[seen:]
            try:
                await self._repository.save(self._name, ledger_to_snapshot(self._engine))
            except BaseException as e:
                logger.error(
                    f"Snapshot save failed during {operation}; restoring ledger: {e!r}",
                    extra={"ledger": self._name},
                )
                self._engine = ledger_from_snapshot(before)
                raise
            self._publish(new_events)
            return result

    def _publish(self, events: tuple[LedgerEvent, ...]) -> None:
        for event in events:
            self._published.append(event)
            logger.info(
                event.type.value,
                extra={
                    "event": event.type.value,
                    "identity": event.identity,
                    "order_id": event.order_id,
                    "ledger": self._name,
                },
            )

    # --- Profile management --------------------------------------------------

    async def new_user_profile(self, caller: Identity, name: str, age: str) -> None:
        await self._write(
            "new_user_profile", lambda e: e.new_user_profile(caller, name, age),
        )

    async def delete_profile(self, caller: Identity) -> None:
        await self._write("delete_profile", lambda e: e.delete_profile(caller))

    async def admin_delete_profile_and_orders(
        self, admin: Identity, target: Identity,
    ) -> None:
        await self._write(
            "admin_delete_profile_and_orders",
            lambda e: e.admin_delete_profile_and_orders(admin, target),
        )

    async def get_profile(self, caller: Identity, target: Identity) -> tuple[str, str]:
        return await self._read(lambda e: e.get_profile(caller, target))

    # --- Order lifecycle -----------------------------------------------------

    async def create_order(self, customer: Identity, amount: int) -> OrderId:
        return await self._write(
            "create_order", lambda e: e.create_order(customer, amount),
        )

    async def confirm_order(self, caller: Identity, order_id: OrderId) -> None:
        await self._write("confirm_order", lambda e: e.confirm_order(caller, order_id))

    async def confirm_delivery(self, caller: Identity, order_id: OrderId) -> None:
        await self._write(
            "confirm_delivery", lambda e: e.confirm_delivery(caller, order_id),
        )

    async def cancel_order(self, caller: Identity, order_id: OrderId) -> None:
        await self._write("cancel_order", lambda e: e.cancel_order(caller, order_id))

    # --- Queries -------------------------------------------------------------

    async def get_order_state(self, order_id: OrderId) -> OrderState:
        return await self._read(lambda e: e.get_order_state(order_id))

    async def get_order(self, order_id: OrderId) -> Order:
        return await self._read(lambda e: e.get_order(order_id))

    async def get_orders(self, caller: Identity, target: Identity) -> list[OrderId]:
        return await self._read(lambda e: e.get_orders(caller, target))

    async def get_my_orders(self, caller: Identity) -> list[OrderId]:
        return await self._read(lambda e: e.get_my_orders(caller))

    async def get_my_completed_orders(self, caller: Identity) -> list[OrderId]:
        return await self._read(lambda e: e.get_my_completed_orders(caller))


# Singleton (initialized on startup)
ledger_host: LedgerHost | None = None


async def init_ledger_host(
    repository: LedgerSnapshotRepository, name: str, owner: str,
) -> LedgerHost:
    global ledger_host
    ledger_host = await LedgerHost.open(repository, name, owner)
    return ledger_host


def get_ledger_host() -> LedgerHost:
    """FastAPI dependency for the ledger host."""
    if not ledger_host:
        raise RuntimeError("Ledger host not initialized")
    return ledger_host
