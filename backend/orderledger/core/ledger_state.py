"""Ledger Records — Profile and Order dataclasses plus list bookkeeping helpers.

Invariants:
    - A profile exists iff its name is non-empty (no separate existence flag)
    - Order.id always equals its key in the orders store
    - Order.customer and Order.amount never change after creation
    - current_orders has set semantics: enumeration order is unspecified after any removal

Design Decisions:
    - Plain mutable dataclasses, no IO: the engine mutates them in place
    - swap_remove is O(1): the matched slot takes the last element, then the list shrinks by one
"""

from dataclasses import dataclass, field

from orderledger.core.domain_types import (
    Identity, OrderId, OrderState, DEFAULT_ORDER_STATE,
)


@dataclass
class Profile:
    """Per-identity display attributes plus active and completed order ids."""

    name: str = ""
    age: str = ""
    current_orders: list[OrderId] = field(default_factory=list)
    completed_orders: list[OrderId] = field(default_factory=list)

    @property
    def exists(self) -> bool:
        return self.name != ""

    @property
    def has_active_orders(self) -> bool:
        return len(self.current_orders) > 0


@dataclass
class Order:
    """A purchase order with fixed customer/amount and a mutable lifecycle state."""

    id: OrderId
    customer: Identity
    amount: int
    state: OrderState = DEFAULT_ORDER_STATE


def swap_remove(items: list[OrderId], target: OrderId) -> bool:
    """Remove the first occurrence of target by swapping in the last element.

    Returns False when target is absent (list untouched).
    """
    try:
        index = items.index(target)
    except ValueError:
        return False
    items[index] = items[-1]
    items.pop()
    return True
