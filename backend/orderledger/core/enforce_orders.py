"""Order & Profile Enforcement — pure precondition checks for every engine operation.

Invariants:
    - Checks are PURE: they raise a typed LedgerError or return None, never mutate
    - Authorization is checked before state preconditions
    - Cancellation is defined only from Confirmed; Created orders cannot be cancelled

Design Decisions:
    - Separated from the engine so the admin batch path can validate every
      cancellation up front, then apply them
"""

from orderledger.core.domain_types import Identity, OrderState
from orderledger.core.errors import (
    AlreadyCancelledError,
    AlreadyDeliveredError,
    AlreadyInStateError,
    ErrorContext,
    InvalidArgumentError,
    NotConfirmedError,
    UnauthorizedError,
)
from orderledger.core.ledger_state import Order


def check_profile_fields(name: str, age: str) -> None:
    """Name and age are both required, non-empty text."""
    if not name:
        raise InvalidArgumentError("Name cannot be empty", "name")
    if not age:
        raise InvalidArgumentError("Age cannot be empty", "age")


def check_amount(amount: int) -> None:
    if amount <= 0:
        raise InvalidArgumentError("Amount should be greater than 0", "amount")


def check_is_owner(caller: Identity, owner: Identity, operation: str) -> None:
    if caller != owner:
        raise UnauthorizedError(
            f"Only owner can {operation}",
            ErrorContext(identity=caller, operation=operation),
        )


def _context(order: Order, caller: Identity, operation: str) -> ErrorContext:
    return ErrorContext(identity=caller, order_id=order.id, operation=operation)


def check_can_confirm(order: Order, caller: Identity) -> None:
    """Rule: only the customer confirms, and only from Created."""
    if caller != order.customer:
        raise UnauthorizedError(
            "Only customer can confirm order",
            _context(order, caller, "confirm_order"),
        )
    if order.state != OrderState.CREATED:
        raise AlreadyInStateError(
            f"Order already {order.state.value}",
            _context(order, caller, "confirm_order"),
        )


def check_can_deliver(order: Order, caller: Identity) -> None:
    """Rule: only the customer confirms delivery, and only from Confirmed."""
    ctx = _context(order, caller, "confirm_delivery")
    if caller != order.customer:
        raise UnauthorizedError("Only customer can confirm delivery", ctx)
    if order.state == OrderState.DELIVERED:
        raise AlreadyDeliveredError(ctx)
    if order.state != OrderState.CONFIRMED:
        raise NotConfirmedError(ctx)


def check_can_cancel(order: Order, caller: Identity, owner: Identity) -> None:
    """Rule: the customer (or the owner on their behalf) cancels a Confirmed order."""
    ctx = _context(order, caller, "cancel_order")
    if caller != order.customer and caller != owner:
        raise UnauthorizedError("Only customer can cancel order", ctx)
    if order.state == OrderState.CANCELLED:
        raise AlreadyCancelledError(ctx)
    if order.state == OrderState.DELIVERED:
        raise AlreadyDeliveredError(ctx)
    if order.state == OrderState.CREATED:
        raise NotConfirmedError(ctx)
