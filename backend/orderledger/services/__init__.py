"""Services Layer — the ledger host that serializes and persists engine calls.

Invariants:
    - Exactly one engine call runs at a time per host
    - Persistence happens after the engine call, inside the same critical section
"""
