"""Database Package - declarative Base shared by ORM models and alembic.

Invariants:
    - Engines and sessions are owned by infrastructure/database.py, not here
"""
