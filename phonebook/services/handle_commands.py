"""Command Handlers - create, update and delete (one storage write each).

Invariants:
    - Each handler opens its own session per call; no state between calls
    - Update/delete of an absent id returns False, never raises
    - A stale write is re-checked once (entry_store.resolve_conflict)
    - Update touches name and phone_number only; id never changes
"""

import logging

from sqlalchemy.orm.exc import StaleDataError

from phonebook.core.domain_types import Entry
from phonebook.core.messages import CreateEntry, DeleteEntry, UpdateEntry
from phonebook.models.phonebook_entry import PhoneBookEntry
from phonebook.services.entry_store import SessionScope, find_row, resolve_conflict

logger = logging.getLogger(__name__)


class CreateEntryHandler:
    """Insert an entry; storage assigns the id."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def handle(self, message: CreateEntry) -> Entry:
        async with self._session_scope() as db:
            row = PhoneBookEntry(
                name=message.entry.name,
                phone_number=message.entry.phone_number,
            )
            db.add(row)
            await db.commit()
            await db.refresh(row)
            logger.info(
                f"Created entry {row.id}", extra={"entry_id": row.id},
            )
            return row.to_entry()


class UpdateEntryHandler:
    """Overwrite name/phone_number of an existing entry."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def handle(self, message: UpdateEntry) -> bool:
        async with self._session_scope() as db:
            row = await find_row(db, message.id)
            if row is None:
                return False
            row.name = message.entry.name
            row.phone_number = message.entry.phone_number
            try:
                await db.commit()
            except StaleDataError:
                await db.rollback()
                return await resolve_conflict(db, message.id, "update")
            logger.info(
                f"Updated entry {message.id}", extra={"entry_id": message.id},
            )
            return True


class DeleteEntryHandler:
    """Remove an existing entry."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def handle(self, message: DeleteEntry) -> bool:
        async with self._session_scope() as db:
            row = await find_row(db, message.id)
            if row is None:
                return False
            await db.delete(row)
            try:
                await db.commit()
            except StaleDataError:
                await db.rollback()
                return await resolve_conflict(db, message.id, "delete")
            logger.info(
                f"Deleted entry {message.id}", extra={"entry_id": message.id},
            )
            return True
