"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never encodes ledger rules
    - All SQLAlchemy failures surface as DatabaseError
"""
