"""Ledger Schemas — Pydantic models for the profile and order endpoints.

Invariants:
    - ProfileCreate does NOT enforce non-empty name/age: the engine reports those
      as INVALID_ARGUMENT with the ledger's own messages
    - OrderCreate.amount is an int >= 0; zero reaches the engine and is rejected there
    - Responses expose OrderState values as strings
"""

from pydantic import BaseModel, Field

from orderledger.core.domain_types import OrderState
from orderledger.core.ledger_state import Order


class ProfileCreate(BaseModel):
    """Register or rename the calling identity's profile."""
    name: str = Field(max_length=200)
    age: str = Field(max_length=20)


class ProfileResponse(BaseModel):
    identity: str
    name: str
    age: str


class OrderCreate(BaseModel):
    """Place an order; customer defaults to the calling identity."""
    amount: int = Field(ge=0)
    customer: str | None = Field(None, max_length=100)


class OrderResponse(BaseModel):
    id: int
    customer: str
    amount: int
    state: OrderState

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id, customer=order.customer,
            amount=order.amount, state=order.state,
        )


class OrderStateResponse(BaseModel):
    id: int
    state: OrderState


class OrderListResponse(BaseModel):
    identity: str
    order_ids: list[int]
