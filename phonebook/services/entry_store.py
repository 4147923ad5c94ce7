"""Entry Store Helpers - the storage reads shared by command and query handlers.

Invariants:
    - Helpers run inside a session the caller already opened
    - resolve_conflict is the only place a StaleDataError is given meaning

Design Decisions:
    - SessionScope is a zero-arg callable returning an async context manager:
      DatabaseSessionManager.session in production, a plain async_sessionmaker
      in tests
"""

import logging
from contextlib import AbstractAsyncContextManager
from typing import Callable

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from phonebook.core.domain_types import EntryId
from phonebook.core.errors import ConcurrencyError, ErrorContext
from phonebook.models.phonebook_entry import PhoneBookEntry

logger = logging.getLogger(__name__)

SessionScope = Callable[[], AbstractAsyncContextManager[AsyncSession]]


async def find_row(db: AsyncSession, entry_id: EntryId) -> PhoneBookEntry | None:
    return await db.get(PhoneBookEntry, entry_id)


async def entry_exists(db: AsyncSession, entry_id: EntryId) -> bool:
    count = await db.scalar(
        select(func.count()).select_from(PhoneBookEntry)
        .where(PhoneBookEntry.id == entry_id),
    )
    return bool(count)


async def resolve_conflict(
    db: AsyncSession, entry_id: EntryId, operation: str,
) -> bool:
    """Re-check existence once after a stale write. Returns False if the row is gone.

    Raises ConcurrencyError if the row still exists: the conflict is real
    and the request fails.
    """
    if not await entry_exists(db, entry_id):
        logger.info(
            f"Entry {entry_id} vanished during {operation}",
            extra={"entry_id": entry_id},
        )
        return False
    raise ConcurrencyError(
        f"Entry {entry_id} was modified concurrently during {operation}",
        ErrorContext(entry_id=entry_id),
    )
