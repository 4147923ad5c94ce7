"""Messages - immutable descriptions of one phonebook operation each.

Invariants:
    - Exactly six message types; MESSAGE_TYPES is the closed set
    - Every message declares its result type in result_type
    - Messages are frozen after construction

Design Decisions:
    - Frozen dataclasses over Pydantic models: messages never cross the
      HTTP boundary, schemas do the validation before a message exists
    - Commands (writes) and queries (reads) share one module: six small types
"""

from dataclasses import dataclass
from typing import ClassVar

from phonebook.core.domain_types import Entry, EntryId, EntryLookup, NewEntry


# ─── Commands ────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateEntry:
    """Insert a new entry. Result: the stored Entry with its id."""
    result_type: ClassVar[object] = Entry
    entry: NewEntry


@dataclass(frozen=True)
class UpdateEntry:
    """Overwrite name/phone of an existing entry. Result: False if absent."""
    result_type: ClassVar[object] = bool
    id: EntryId
    entry: NewEntry


@dataclass(frozen=True)
class DeleteEntry:
    """Remove an entry. Result: False if absent."""
    result_type: ClassVar[object] = bool
    id: EntryId


# ─── Queries ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class GetAllEntries:
    """Every stored entry, ordered by id."""
    result_type: ClassVar[object] = list[Entry]


@dataclass(frozen=True)
class GetEntryById:
    result_type: ClassVar[object] = EntryLookup
    id: EntryId


@dataclass(frozen=True)
class GetEntryByName:
    """First entry whose name matches case-insensitively."""
    result_type: ClassVar[object] = EntryLookup
    name: str


Message = (
    CreateEntry | UpdateEntry | DeleteEntry
    | GetAllEntries | GetEntryById | GetEntryByName
)

MESSAGE_TYPES: tuple[type, ...] = (
    CreateEntry, UpdateEntry, DeleteEntry,
    GetAllEntries, GetEntryById, GetEntryByName,
)
