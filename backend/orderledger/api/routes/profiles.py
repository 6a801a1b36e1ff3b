"""Profile Routes — registration, deletion, and owner-only profile reads.

Invariants:
    - Caller identity always comes from get_caller, never from the body or path
    - Routes hold no ledger rules; every check happens in the engine
    - DELETE /me is declared before DELETE /{identity}
"""

from fastapi import APIRouter, Depends, status

from orderledger.api.dependencies import get_caller
from orderledger.core.domain_types import Identity
from orderledger.schemas.ledger import (
    OrderListResponse, ProfileCreate, ProfileResponse,
)
from orderledger.services.ledger_host import LedgerHost, get_ledger_host

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.post(
    "", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED,
)
async def create_profile(
    body: ProfileCreate,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    """Create or overwrite the caller's profile (order lists are kept)."""
    await host.new_user_profile(caller, body.name, body.age)
    return ProfileResponse(identity=caller, name=body.name, age=body.age)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_profile(
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    """Delete the caller's profile; blocked while it has active orders."""
    await host.delete_profile(caller)


@router.delete("/{identity}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_profile(
    identity: str,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    """Owner only: cancel the target's current orders and erase the profile."""
    await host.admin_delete_profile_and_orders(caller, Identity(identity))


@router.get("/{identity}", response_model=ProfileResponse)
async def get_profile(
    identity: str,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    name, age = await host.get_profile(caller, Identity(identity))
    return ProfileResponse(identity=identity, name=name, age=age)


@router.get("/{identity}/orders", response_model=OrderListResponse)
async def get_profile_orders(
    identity: str,
    caller: Identity = Depends(get_caller),
    host: LedgerHost = Depends(get_ledger_host),
):
    """Owner only: the target's current order ids."""
    order_ids = await host.get_orders(caller, Identity(identity))
    return OrderListResponse(identity=identity, order_ids=order_ids)
