"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - The engine reaches its two maps only through KeyValueStore
    - Snapshot persistence is accessed through LedgerSnapshotRepository

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - KeyValueStore is sync because the engine never suspends;
      LedgerSnapshotRepository is async because its implementations do IO
"""

from typing import Iterator, Protocol, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class KeyValueStore(Protocol[K, V]):
    """Abstract map owned by the engine (profiles or orders)."""
    def get(self, key: K) -> V | None: ...
    def put(self, key: K, value: V) -> None: ...
    def delete(self, key: K) -> None: ...
    def __contains__(self, key: object) -> bool: ...
    def items(self) -> Iterator[tuple[K, V]]: ...


class LedgerSnapshotRepository(Protocol):
    """Contract for snapshot persistence — implemented by infrastructure."""
    async def load(self, name: str) -> dict | None: ...
    async def save(self, name: str, snapshot: dict) -> None: ...
