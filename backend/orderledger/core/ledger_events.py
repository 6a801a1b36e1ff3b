"""Ledger Events — append-only notifications emitted per successful transition.

Invariants:
    - Exactly one event per successful transition, appended in transition order
    - Events are frozen; the log is never rewritten
    - Failed operations emit nothing (validation precedes mutation)
"""

from dataclasses import dataclass, asdict

from orderledger.core.domain_types import Identity, LedgerEventType, OrderId


@dataclass(frozen=True)
class LedgerEvent:
    """One externally observable log entry."""

    type: LedgerEventType
    identity: Identity
    order_id: OrderId | None = None
    name: str | None = None
    age: str | None = None
    amount: int | None = None

    def to_dict(self) -> dict:
        """JSON-safe view with unset fields dropped."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        data["type"] = self.type.value
        return data


def profile_created(identity: Identity, name: str, age: str) -> LedgerEvent:
    return LedgerEvent(LedgerEventType.PROFILE_CREATED, identity, name=name, age=age)


def profile_deleted(identity: Identity) -> LedgerEvent:
    return LedgerEvent(LedgerEventType.PROFILE_DELETED, identity)


def order_created(order_id: OrderId, customer: Identity, amount: int) -> LedgerEvent:
    return LedgerEvent(
        LedgerEventType.ORDER_CREATED, customer, order_id=order_id, amount=amount,
    )


def order_confirmed(order_id: OrderId, customer: Identity) -> LedgerEvent:
    return LedgerEvent(LedgerEventType.ORDER_CONFIRMED, customer, order_id=order_id)


def order_delivered(order_id: OrderId, customer: Identity) -> LedgerEvent:
    return LedgerEvent(LedgerEventType.ORDER_DELIVERED, customer, order_id=order_id)


def order_cancelled(order_id: OrderId, customer: Identity) -> LedgerEvent:
    return LedgerEvent(LedgerEventType.ORDER_CANCELLED, customer, order_id=order_id)
