"""Ledger Snapshot — serialization / deserialization of the engine's durable state.

Invariants:
    - to_snapshot produces a JSON-safe dict (no Enums, string map keys)
    - from_snapshot reconstructs an engine with identical maps, counter and owner
    - Missing keys fall back to defaults (forward-compatible)
    - The event log is NOT part of the snapshot (it is not durable state)
"""

from orderledger.core.domain_types import (
    Identity, OrderId, OrderState, FIRST_ORDER_ID,
)
from orderledger.core.key_value_store import InMemoryKeyValueStore
from orderledger.core.ledger_engine import LedgerEngine
from orderledger.core.ledger_state import Order, Profile


def _serialize_profile(profile: Profile) -> dict:
    return {
        "name": profile.name,
        "age": profile.age,
        "current_orders": list(profile.current_orders),
        "completed_orders": list(profile.completed_orders),
    }


def _serialize_order(order: Order) -> dict:
    return {
        "id": order.id,
        "customer": order.customer,
        "amount": order.amount,
        "state": order.state.value,
    }


def ledger_to_snapshot(engine: LedgerEngine) -> dict:
    """Serialize the two maps and the id counter to a JSON-safe dict."""
    return {
        "owner": engine.owner,
        "next_order_id": engine.next_order_id,
        "profiles": {
            identity: _serialize_profile(profile)
            for identity, profile in engine.profiles.items()
        },
        "orders": {
            str(order_id): _serialize_order(order)
            for order_id, order in engine.orders.items()
        },
    }


def _restore_profile(data: dict) -> Profile:
    return Profile(
        name=data.get("name", ""),
        age=data.get("age", ""),
        current_orders=[OrderId(int(i)) for i in data.get("current_orders", [])],
        completed_orders=[OrderId(int(i)) for i in data.get("completed_orders", [])],
    )


def _restore_order(key: str, data: dict) -> Order:
    return Order(
        id=OrderId(int(data.get("id", key))),
        customer=Identity(data["customer"]),
        amount=int(data["amount"]),
        state=OrderState(data.get("state", OrderState.CREATED.value)),
    )


def ledger_from_snapshot(data: dict) -> LedgerEngine:
    """Rebuild an engine from a snapshot produced by ledger_to_snapshot."""
    profiles: InMemoryKeyValueStore[Identity, Profile] = InMemoryKeyValueStore({
        Identity(identity): _restore_profile(p)
        for identity, p in data.get("profiles", {}).items()
    })
    orders: InMemoryKeyValueStore[OrderId, Order] = InMemoryKeyValueStore({
        OrderId(int(key)): _restore_order(key, o)
        for key, o in data.get("orders", {}).items()
    })
    return LedgerEngine(
        owner=Identity(data["owner"]),
        profiles=profiles,
        orders=orders,
        next_order_id=int(data.get("next_order_id", FIRST_ORDER_ID)),
    )
