"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - Identity wraps the host-supplied caller token — never compare raw strings in rules
    - OrderId is a non-negative int allocated sequentially from 0
    - OrderState enum order matches the lifecycle (Created is the zero value)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (snapshot + API responses)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
OrderId = NewType("OrderId", int)

ZERO_ADDRESS: Identity = Identity("0x" + "0" * 40)


def is_null_identity(identity: str | None) -> bool:
    """True for the empty identity and the zero address."""
    if not identity:
        return True
    return identity.lower() == ZERO_ADDRESS


# ─── Enums ───────────────────────────────────────────────────────

class OrderState(str, Enum):
    """Order lifecycle: Created -> Confirmed -> Delivered | Cancelled."""
    CREATED = "created"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class LedgerEventType(str, Enum):
    """Notifications emitted exactly once per successful transition."""
    PROFILE_CREATED = "ProfileCreated"
    PROFILE_DELETED = "ProfileDeleted"
    ORDER_CREATED = "OrderCreated"
    ORDER_CONFIRMED = "OrderConfirmed"
    ORDER_DELIVERED = "OrderDelivered"
    ORDER_CANCELLED = "OrderCancelled"


# ─── Constants ───────────────────────────────────────────────────

FIRST_ORDER_ID: OrderId = OrderId(0)
DEFAULT_ORDER_STATE: OrderState = OrderState.CREATED
