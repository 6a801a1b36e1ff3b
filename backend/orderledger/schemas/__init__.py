"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; ledger rules stay in core/
    - Domain enums from core/ used for state fields
"""
