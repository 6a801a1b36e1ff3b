"""In-Memory Key-Value Store — dict-backed KeyValueStore used by the engine.

Invariants:
    - delete() of a missing key is a no-op
    - items() yields in insertion order (dict semantics)
"""

from typing import Generic, Iterator, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class InMemoryKeyValueStore(Generic[K, V]):
    """Dict-backed store, one per engine map."""

    def __init__(self, initial: dict[K, V] | None = None):
        self._data: dict[K, V] = dict(initial or {})

    def get(self, key: K) -> V | None:
        return self._data.get(key)

    def put(self, key: K, value: V) -> None:
        self._data[key] = value

    def delete(self, key: K) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def items(self) -> Iterator[tuple[K, V]]:
        return iter(list(self._data.items()))
