"""Query Handlers - read-only lookups, one SELECT each.

Invariants:
    - Absent results are Missing(), never None and never an exception
    - Name lookup is case-insensitive; ties resolve to the lowest id
"""

from sqlalchemy import func, select

from phonebook.core.domain_types import Entry, EntryLookup, Found, Missing
from phonebook.core.messages import GetAllEntries, GetEntryById, GetEntryByName
from phonebook.models.phonebook_entry import PhoneBookEntry
from phonebook.services.entry_store import SessionScope, find_row


class GetAllEntriesHandler:
    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def handle(self, message: GetAllEntries) -> list[Entry]:
        async with self._session_scope() as db:
            result = await db.execute(
                select(PhoneBookEntry).order_by(PhoneBookEntry.id),
            )
            return [row.to_entry() for row in result.scalars().all()]


class GetEntryByIdHandler:
    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def handle(self, message: GetEntryById) -> EntryLookup:
        async with self._session_scope() as db:
            row = await find_row(db, message.id)
            return Found(row.to_entry()) if row else Missing()


class GetEntryByNameHandler:
    """lower(name) = lower(query), both folded by the database; first by id."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def handle(self, message: GetEntryByName) -> EntryLookup:
        async with self._session_scope() as db:
            result = await db.execute(
                select(PhoneBookEntry)
                .where(func.lower(PhoneBookEntry.name) == func.lower(message.name))
                .order_by(PhoneBookEntry.id)
                .limit(1),
            )
            row = result.scalars().first()
            return Found(row.to_entry()) if row else Missing()
