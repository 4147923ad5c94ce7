"""Infrastructure Layer - database engine/sessions and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures leave this layer as DatabaseError
"""
