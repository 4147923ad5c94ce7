"""ORM Models - SQLAlchemy declarative models for the phonebook.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from phonebook.models.phonebook_entry import PhoneBookEntry  # noqa: F401
