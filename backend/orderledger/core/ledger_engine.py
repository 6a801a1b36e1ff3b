"""Ledger Engine — profile and order state-transition engine.

Invariants:
    - Created/Confirmed order ids appear exactly once in the customer's current_orders
    - Delivered order ids appear exactly once in completed_orders, never in current_orders
    - Cancelled order ids appear in neither list; the Order record is kept
    - Order ids are allocated 0, 1, 2, ... and never reused
    - The owner is fixed at construction and never changes
    - Every operation validates fully before the first mutation

Design Decisions:
    - Caller identity is always an explicit argument, never ambient state
    - Maps reached through KeyValueStore; InMemoryKeyValueStore by default
    - Not thread-safe: the host serializes calls (services/ledger_host.py)
    - get_order_state on an unknown id returns Created, the zero value
"""

from dataclasses import replace

from orderledger.core.domain_types import (
    Identity, OrderId, OrderState, FIRST_ORDER_ID, DEFAULT_ORDER_STATE,
    is_null_identity,
)
from orderledger.core.enforce_orders import (
    check_amount,
    check_can_cancel,
    check_can_confirm,
    check_can_deliver,
    check_is_owner,
    check_profile_fields,
)
from orderledger.core.errors import (
    ErrorContext,
    InvalidArgumentError,
    NotFoundError,
    PreconditionFailedError,
)
from orderledger.core.key_value_store import InMemoryKeyValueStore
from orderledger.core.ledger_events import (
    LedgerEvent,
    order_cancelled,
    order_confirmed,
    order_created,
    order_delivered,
    profile_created,
    profile_deleted,
)
from orderledger.core.ledger_state import Order, Profile, swap_remove
from orderledger.core.repository_protocols import KeyValueStore

PROFILE_MISSING = "User profile does not exist"


class LedgerEngine:
    """Owns the Profiles and Orders maps plus the order-id counter."""

    def __init__(
        self,
        owner: Identity,
        profiles: KeyValueStore[Identity, Profile] | None = None,
        orders: KeyValueStore[OrderId, Order] | None = None,
        next_order_id: int = FIRST_ORDER_ID,
    ):
        if is_null_identity(owner):
            raise InvalidArgumentError("Owner identity cannot be null", "owner")
        self._owner = owner
        self._profiles = profiles if profiles is not None else InMemoryKeyValueStore()
        self._orders = orders if orders is not None else InMemoryKeyValueStore()
        self._next_order_id = next_order_id
        self._events: list[LedgerEvent] = []

    # --- Read-only views ----------------------------------------------------

    @property
    def owner(self) -> Identity:
        return self._owner

    @property
    def next_order_id(self) -> OrderId:
        return OrderId(self._next_order_id)

    @property
    def events(self) -> tuple[LedgerEvent, ...]:
        return tuple(self._events)

    @property
    def profiles(self) -> KeyValueStore[Identity, Profile]:
        return self._profiles

    @property
    def orders(self) -> KeyValueStore[OrderId, Order]:
        return self._orders

    # --- Internal lookups ---------------------------------------------------

    def _existing_profile(self, identity: Identity) -> Profile | None:
        profile = self._profiles.get(identity)
        if profile is None or not profile.exists:
            return None
        return profile

    def _require_profile(self, identity: Identity, operation: str) -> Profile:
        profile = self._existing_profile(identity)
        if profile is None:
            raise NotFoundError(
                "Profile", identity, PROFILE_MISSING,
                ErrorContext(identity=identity, operation=operation),
            )
        return profile

    def _require_order(self, order_id: OrderId, operation: str) -> Order:
        order = self._orders.get(order_id)
        if order is None or order.id != order_id:
            raise NotFoundError(
                "Order", str(order_id), "Order does not exist",
                ErrorContext(order_id=order_id, operation=operation),
            )
        return order

    def _emit(self, event: LedgerEvent) -> None:
        self._events.append(event)

    # --- Profile management -------------------------------------------------

    def new_user_profile(self, caller: Identity, name: str, age: str) -> None:
        """Insert or overwrite name/age; existing order lists are preserved."""
        check_profile_fields(name, age)
        profile = self._profiles.get(caller)
        if profile is None:
            profile = Profile()
        profile.name = name
        profile.age = age
        self._profiles.put(caller, profile)
        self._emit(profile_created(caller, name, age))

    def delete_profile(self, caller: Identity) -> None:
        profile = self._require_profile(caller, "delete_profile")
        if profile.has_active_orders:
            raise PreconditionFailedError(
                "Cannot delete profile with active orders",
                ErrorContext(identity=caller, operation="delete_profile"),
            )
        self._profiles.delete(caller)
        self._emit(profile_deleted(caller))

    def admin_delete_profile_and_orders(self, admin: Identity, target: Identity) -> None:
        """Cancel every current order of target on its behalf, then erase the profile.

        All cancellations are validated before any is applied: the first
        failing order aborts the whole deletion with nothing mutated.
        """
        check_is_owner(admin, self._owner, "delete other profiles")
        profile = self._require_profile(target, "admin_delete_profile_and_orders")
        pending = [
            self._require_order(order_id, "admin_delete_profile_and_orders")
            for order_id in list(profile.current_orders)
        ]
        for order in pending:
            check_can_cancel(order, admin, self._owner)
        for order in pending:
            self._apply_cancel(order)
        self._profiles.delete(target)
        self._emit(profile_deleted(target))

    def get_profile(self, caller: Identity, target: Identity) -> tuple[str, str]:
        check_is_owner(caller, self._owner, "read profiles")
        if is_null_identity(target):
            raise InvalidArgumentError("Invalid address", "target")
        profile = self._require_profile(target, "get_profile")
        return profile.name, profile.age

    # --- Order lifecycle ----------------------------------------------------

    def create_order(self, customer: Identity, amount: int) -> OrderId:
        profile = self._require_profile(customer, "create_order")
        check_amount(amount)
        order_id = OrderId(self._next_order_id)
        self._next_order_id += 1
        self._orders.put(order_id, Order(id=order_id, customer=customer, amount=amount))
        profile.current_orders.append(order_id)
        self._emit(order_created(order_id, customer, amount))
        return order_id

    def confirm_order(self, caller: Identity, order_id: OrderId) -> None:
        order = self._require_order(order_id, "confirm_order")
        check_can_confirm(order, caller)
        order.state = OrderState.CONFIRMED
        self._emit(order_confirmed(order.id, order.customer))

    def confirm_delivery(self, caller: Identity, order_id: OrderId) -> None:
        order = self._require_order(order_id, "confirm_delivery")
        check_can_deliver(order, caller)
        order.state = OrderState.DELIVERED
        self._emit(order_delivered(order.id, order.customer))
        profile = self._profiles.get(order.customer)
        if profile is not None:
            swap_remove(profile.current_orders, order.id)
            profile.completed_orders.append(order.id)

    def cancel_order(self, caller: Identity, order_id: OrderId) -> None:
        """Customer cancels its own Confirmed order; the owner may cancel any."""
        order = self._require_order(order_id, "cancel_order")
        check_can_cancel(order, caller, self._owner)
        self._apply_cancel(order)

    def _apply_cancel(self, order: Order) -> None:
        order.state = OrderState.CANCELLED
        self._emit(order_cancelled(order.id, order.customer))
        profile = self._profiles.get(order.customer)
        if profile is not None:
            swap_remove(profile.current_orders, order.id)

    # --- Queries ------------------------------------------------------------

    def get_order_state(self, order_id: OrderId) -> OrderState:
        """State of the order; an id never created reads as Created."""
        order = self._orders.get(order_id)
        if order is None:
            return DEFAULT_ORDER_STATE
        return order.state

    def get_order(self, order_id: OrderId) -> Order:
        """Copy of the order record; mutating it does not touch the ledger."""
        return replace(self._require_order(order_id, "get_order"))

    def get_orders(self, caller: Identity, target: Identity) -> list[OrderId]:
        check_is_owner(caller, self._owner, "read orders of other users")
        profile = self._require_profile(target, "get_orders")
        return list(profile.current_orders)

    def get_my_orders(self, caller: Identity) -> list[OrderId]:
        return list(self._require_profile(caller, "get_my_orders").current_orders)

    def get_my_completed_orders(self, caller: Identity) -> list[OrderId]:
        return list(self._require_profile(caller, "get_my_completed_orders").completed_orders)
