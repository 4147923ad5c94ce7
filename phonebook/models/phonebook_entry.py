"""PhoneBookEntry ORM - one row per phonebook entry.

Invariants:
    - id is an autoincrement integer primary key, assigned on insert
    - name and phone_number are non-nullable, bounded by domain_types limits
    - version is bumped by the ORM on every UPDATE; a stale version raises
      StaleDataError on flush

Design Decisions:
    - version_id_col for optimistic concurrency: same-entry races are detected
      by the storage layer, handlers only decide what a conflict means
    - Index on name: lookup-by-name is the only non-key read
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from phonebook.core.domain_types import (
    Entry, EntryId, NAME_MAX_LENGTH, PHONE_NUMBER_MAX_LENGTH,
)
from phonebook.db.base import Base


class PhoneBookEntry(Base):
    """Persisted phonebook entry."""
    __tablename__ = "phonebook_entries"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, index=True,
    )
    phone_number: Mapped[str] = mapped_column(
        String(PHONE_NUMBER_MAX_LENGTH), nullable=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def to_entry(self) -> Entry:
        return Entry(
            id=EntryId(self.id),
            name=self.name,
            phone_number=self.phone_number,
        )
