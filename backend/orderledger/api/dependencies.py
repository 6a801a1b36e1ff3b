"""Request Dependencies — caller identity supplied by the host gateway.

Invariants:
    - Identity arrives pre-verified in the X-Caller-Identity header
    - A missing header is a request validation error (400), never an anonymous call
    - A blank or zero-address header is the null identity and is rejected (400)
"""

from fastapi import Header

from orderledger.core.domain_types import Identity, is_null_identity
from orderledger.core.errors import InvalidArgumentError


async def get_caller(
    x_caller_identity: str = Header(..., min_length=1, max_length=100),
) -> Identity:
    """FastAPI dependency returning the authenticated caller."""
    identity = x_caller_identity.strip()
    if is_null_identity(identity):
        raise InvalidArgumentError("Invalid caller identity", "X-Caller-Identity")
    return Identity(identity)
