"""Domain Types - the Entry value object and the explicit lookup result.

Invariants:
    - Entry is immutable; handlers build a new Entry from the ORM row
    - NewEntry never carries an id (storage assigns it on create)
    - EntryLookup is exactly Found | Missing, never None

Design Decisions:
    - NewType for EntryId: zero runtime cost, type-checker sees the intent
    - Field bounds live here so schemas, ORM columns and migrations share them
"""

import re
from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntryId = NewType("EntryId", int)


# ─── Field Bounds ────────────────────────────────────────────────

NAME_MAX_LENGTH = 100
PHONE_NUMBER_MAX_LENGTH = 20

# Optional leading +, digits grouped by spaces/dashes/dots/parentheses,
# optional extension ("x12", "ext. 12").
PHONE_NUMBER_PATTERN = r"^\+?\(?\d[\d\s().-]*(\s*(x|ext\.?)\s*\d+)?$"
_PHONE_NUMBER_RE = re.compile(PHONE_NUMBER_PATTERN, re.IGNORECASE)


def is_phone_number(value: str) -> bool:
    """True if value looks like a phone number."""
    return bool(_PHONE_NUMBER_RE.match(value))


# ─── Values ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class NewEntry:
    """Fields a caller may set: name and phone number."""
    name: str
    phone_number: str


@dataclass(frozen=True)
class Entry:
    """A stored phonebook entry."""
    id: EntryId
    name: str
    phone_number: str


@dataclass(frozen=True)
class Found:
    entry: Entry


@dataclass(frozen=True)
class Missing:
    pass


EntryLookup = Found | Missing
