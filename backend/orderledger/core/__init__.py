"""Core Layer — pure ledger logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Every engine operation validates fully before it mutates anything

Design Decisions:
    - Functional core separated from imperative shell (the host in services/)
"""
