"""Order Routes — order creation, lifecycle transitions, and order queries.

Invariants:
    - /mine routes are declared before /{order_id}
    - Transition endpoints return the order as it stands after the transition
    - GET /{order_id}/state answers "created" for ids that were never allocated
"""

from fastapi import APIRouter, Depends, status

from orderledger.api.dependencies import get_caller
from orderledger.core.domain_types import Identity, OrderId
from orderledger.schemas.ledger import (
    OrderCreate, OrderListResponse, OrderResponse, OrderStateResponse,
)
from orderledger.services.ledger_host import LedgerHost, get_ledger_host

router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


@router.post(
    "", response_model=OrderResponse, status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: OrderCreate,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    """Create an order for body.customer, or for the caller when omitted."""
    customer = Identity(body.customer) if body.customer else caller
    order_id = await host.create_order(customer, body.amount)
    return OrderResponse.from_order(await host.get_order(order_id))


@router.get("/mine", response_model=OrderListResponse)
async def get_my_orders(
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    order_ids = await host.get_my_orders(caller)
    return OrderListResponse(identity=caller, order_ids=order_ids)


@router.get("/mine/completed", response_model=OrderListResponse)
async def get_my_completed_orders(
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    order_ids = await host.get_my_completed_orders(caller)
    return OrderListResponse(identity=caller, order_ids=order_ids)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int, host: LedgerHost = Depends(get_ledger_host),
):
    return OrderResponse.from_order(await host.get_order(OrderId(order_id)))


@router.get("/{order_id}/state", response_model=OrderStateResponse)
async def get_order_state(
    order_id: int, host: LedgerHost = Depends(get_ledger_host),
):
    state = await host.get_order_state(OrderId(order_id))
    return OrderStateResponse(id=order_id, state=state)


@router.post("/{order_id}/confirm", response_model=OrderResponse)
async def confirm_order(
    order_id: int,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    await host.confirm_order(caller, OrderId(order_id))
    return OrderResponse.from_order(await host.get_order(OrderId(order_id)))


@router.post("/{order_id}/deliver", response_model=OrderResponse)
async def confirm_delivery(
    order_id: int,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    await host.confirm_delivery(caller, OrderId(order_id))
    return OrderResponse.from_order(await host.get_order(OrderId(order_id)))


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: int,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    """Customer cancels a confirmed order; the owner may cancel any."""
    await host.cancel_order(caller, OrderId(order_id))
    return OrderResponse.from_order(await host.get_order(OrderId(order_id)))
