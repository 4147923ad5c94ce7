"""Core Layer - domain types, messages and errors. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
"""
