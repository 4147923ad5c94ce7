"""Pydantic Schemas - request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary, before a message is built
    - Bounds and patterns come from core/domain_types
"""
