"""Ledger Engine: Order Lifecycle — pure tests for the order state machine.

Tests cover:
    - create_order validation, sequential ids, list bookkeeping, OrderCreated event
    - confirm_order / confirm_delivery / cancel_order authorization and preconditions
    - Failed transitions leave state and lists unchanged
    - Delivered ids move to completed_orders; cancelled ids leave both lists
"""

import pytest

from orderledger.core.domain_types import Identity, LedgerEventType, OrderId, OrderState
from orderledger.core.errors import (
    AlreadyCancelledError,
    AlreadyDeliveredError,
    AlreadyInStateError,
    InvalidArgumentError,
    InvalidStateError,
    NotConfirmedError,
    NotFoundError,
    UnauthorizedError,
)
from orderledger.core.ledger_engine import LedgerEngine

OWNER = Identity("0xowner")
ALICE = Identity("0xalice")
BOB = Identity("0xbob")


@pytest.fixture
def engine() -> LedgerEngine:
    ledger = LedgerEngine(OWNER)
    ledger.new_user_profile(ALICE, "Alice", "25")
    return ledger


# ─── create_order ────────────────────────────────────────────────

def test_create_order_requires_profile(engine):
    with pytest.raises(NotFoundError, match="User profile does not exist"):
        engine.create_order(BOB, 100)


@pytest.mark.parametrize("amount", [0, 1, 100, 10**30])
def test_create_order_without_profile_fails_for_any_amount(engine, amount):
    with pytest.raises(NotFoundError):
        engine.create_order(BOB, amount)


def test_create_order_zero_amount_rejected(engine):
    with pytest.raises(InvalidArgumentError, match="Amount should be greater than 0"):
        engine.create_order(ALICE, 0)
    assert engine.next_order_id == 0


def test_create_order_stores_created_order(engine):
    order_id = engine.create_order(ALICE, 100)
    order = engine.get_order(order_id)
    assert order_id == 0
    assert (order.id, order.customer, order.amount, order.state) == (
        0, ALICE, 100, OrderState.CREATED,
    )


def test_create_order_emits_order_created(engine):
    engine.create_order(ALICE, 100)
    event = engine.events[-1]
    assert event.type == LedgerEventType.ORDER_CREATED
    assert (event.order_id, event.identity, event.amount) == (0, ALICE, 100)


def test_sequential_orders_get_consecutive_ids(engine):
    assert engine.create_order(ALICE, 100) == 0
    assert engine.create_order(ALICE, 100) == 1
    assert set(engine.get_my_orders(ALICE)) == {0, 1}


def test_ids_never_reused_after_cancellation(engine):
    first = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, first)
    engine.cancel_order(ALICE, first)
    assert engine.create_order(ALICE, 100) == 1


def test_ids_shared_across_customers(engine):
    engine.new_user_profile(BOB, "Bob", "30")
    assert engine.create_order(ALICE, 1) == 0
    assert engine.create_order(BOB, 1) == 1
    assert engine.create_order(ALICE, 1) == 2
    assert engine.get_my_orders(BOB) == [1]


def test_create_order_on_behalf_of_registered_customer(engine):
    order_id = engine.create_order(ALICE, 100)
    assert engine.get_order(order_id).customer == ALICE


# ─── confirm_order ───────────────────────────────────────────────

def test_confirm_order(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    assert engine.get_order_state(order_id) == OrderState.CONFIRMED
    assert engine.events[-1].type == LedgerEventType.ORDER_CONFIRMED


def test_only_customer_can_confirm(engine):
    order_id = engine.create_order(ALICE, 100)
    with pytest.raises(UnauthorizedError, match="Only customer can confirm order"):
        engine.confirm_order(BOB, order_id)
    assert engine.get_order_state(order_id) == OrderState.CREATED


def test_owner_cannot_confirm_for_customer(engine):
    order_id = engine.create_order(ALICE, 100)
    with pytest.raises(UnauthorizedError):
        engine.confirm_order(OWNER, order_id)


def test_confirm_twice_fails_already_in_state(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    with pytest.raises(AlreadyInStateError):
        engine.confirm_order(ALICE, order_id)


def test_confirm_delivered_order_fails(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.confirm_delivery(ALICE, order_id)
    with pytest.raises(AlreadyInStateError):
        engine.confirm_order(ALICE, order_id)
    assert engine.get_order_state(order_id) == OrderState.DELIVERED


def test_confirm_unknown_order_not_found(engine):
    with pytest.raises(NotFoundError):
        engine.confirm_order(ALICE, OrderId(42))


# ─── confirm_delivery ────────────────────────────────────────────

def test_alice_delivery_scenario(engine):
    order_id = engine.create_order(ALICE, 100)
    assert order_id == 0
    engine.confirm_order(ALICE, order_id)
    with pytest.raises(UnauthorizedError, match="Only customer can confirm delivery"):
        engine.confirm_delivery(BOB, order_id)
    engine.confirm_delivery(ALICE, order_id)
    assert engine.get_order_state(order_id) == OrderState.DELIVERED
    assert engine.get_my_orders(ALICE) == []
    assert engine.get_my_completed_orders(ALICE) == [0]


def test_delivery_requires_confirmation(engine):
    order_id = engine.create_order(ALICE, 100)
    with pytest.raises(NotConfirmedError, match="Order not confirmed"):
        engine.confirm_delivery(ALICE, order_id)
    assert engine.get_my_orders(ALICE) == [order_id]


def test_delivery_twice_fails_already_delivered(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.confirm_delivery(ALICE, order_id)
    with pytest.raises(AlreadyDeliveredError, match="Order already delivered"):
        engine.confirm_delivery(ALICE, order_id)
    assert engine.get_my_completed_orders(ALICE) == [order_id]


def test_delivery_of_cancelled_order_not_confirmed(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.cancel_order(ALICE, order_id)
    with pytest.raises(NotConfirmedError):
        engine.confirm_delivery(ALICE, order_id)


def test_delivery_emits_order_delivered(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.confirm_delivery(ALICE, order_id)
    event = engine.events[-1]
    assert event.type == LedgerEventType.ORDER_DELIVERED
    assert (event.order_id, event.identity) == (order_id, ALICE)


def test_delivery_swap_removes_from_current(engine):
    ids = [engine.create_order(ALICE, 10) for _ in range(4)]
    engine.confirm_order(ALICE, ids[1])
    engine.confirm_delivery(ALICE, ids[1])
    assert engine.get_my_orders(ALICE) == [0, 3, 2]


def test_state_errors_share_invalid_state_base(engine):
    order_id = engine.create_order(ALICE, 100)
    with pytest.raises(InvalidStateError):
        engine.confirm_delivery(ALICE, order_id)


# ─── cancel_order ────────────────────────────────────────────────

def test_cancel_confirmed_order(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.cancel_order(ALICE, order_id)
    assert engine.get_order_state(order_id) == OrderState.CANCELLED
    assert engine.get_my_orders(ALICE) == []
    assert engine.get_my_completed_orders(ALICE) == []
    assert engine.events[-1].type == LedgerEventType.ORDER_CANCELLED


def test_cancel_created_order_not_confirmed(engine):
    order_id = engine.create_order(ALICE, 100)
    with pytest.raises(NotConfirmedError):
        engine.cancel_order(ALICE, order_id)
    assert engine.get_order_state(order_id) == OrderState.CREATED
    assert engine.get_my_orders(ALICE) == [order_id]


def test_cancel_twice_already_cancelled(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.cancel_order(ALICE, order_id)
    with pytest.raises(AlreadyCancelledError, match="Order already cancelled"):
        engine.cancel_order(ALICE, order_id)


def test_cancel_delivered_order_already_delivered(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.confirm_delivery(ALICE, order_id)
    with pytest.raises(AlreadyDeliveredError):
        engine.cancel_order(ALICE, order_id)
    assert engine.get_my_completed_orders(ALICE) == [order_id]


def test_stranger_cannot_cancel(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    with pytest.raises(UnauthorizedError):
        engine.cancel_order(BOB, order_id)
    assert engine.get_order_state(order_id) == OrderState.CONFIRMED


def test_owner_can_cancel_on_behalf_of_customer(engine):
    order_id = engine.create_order(ALICE, 100)
    engine.confirm_order(ALICE, order_id)
    engine.cancel_order(OWNER, order_id)
    event = engine.events[-1]
    assert event.type == LedgerEventType.ORDER_CANCELLED
    assert event.identity == ALICE


def test_cancel_unknown_order_not_found(engine):
    with pytest.raises(NotFoundError):
        engine.cancel_order(OWNER, OrderId(3))


# ─── list invariants ─────────────────────────────────────────────

def test_every_id_lives_in_exactly_one_place(engine):
    delivered = engine.create_order(ALICE, 1)
    cancelled = engine.create_order(ALICE, 2)
    pending = engine.create_order(ALICE, 3)
    for order_id in (delivered, cancelled):
        engine.confirm_order(ALICE, order_id)
    engine.confirm_delivery(ALICE, delivered)
    engine.cancel_order(ALICE, cancelled)

    current = engine.get_my_orders(ALICE)
    completed = engine.get_my_completed_orders(ALICE)
    assert current == [pending]
    assert completed == [delivered]
    assert cancelled not in current + completed
