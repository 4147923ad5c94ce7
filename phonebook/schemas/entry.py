"""Entry Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - name: 1-100 chars after stripping whitespace
    - phoneNumber: 1-20 chars after stripping, phone-number format
    - Wire names are camelCase (phoneNumber); Python attributes are snake_case
    - EntryUpdate.id is optional and only checked against the path id

Design Decisions:
    - Aliases with populate_by_name: accepts both spellings, serializes camelCase
    - Mapping to/from domain types lives here so routes stay one-liners
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from phonebook.core.domain_types import (
    Entry, NewEntry,
    NAME_MAX_LENGTH, PHONE_NUMBER_MAX_LENGTH, PHONE_NUMBER_PATTERN,
)


class _EntryFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    phone_number: str = Field(
        alias="phoneNumber",
        min_length=1,
        max_length=PHONE_NUMBER_MAX_LENGTH,
        pattern=PHONE_NUMBER_PATTERN,
    )

    @field_validator("name", "phone_number", mode="before")
    @classmethod
    def strip_whitespace(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty or whitespace")
        return v

    def to_new_entry(self) -> NewEntry:
        return NewEntry(name=self.name, phone_number=self.phone_number)


class EntryCreate(_EntryFields):
    """POST body."""


class EntryUpdate(_EntryFields):
    """PUT body. id, when sent, must equal the path id."""
    id: int | None = None


class EntryResponse(BaseModel):
    """Public-facing entry."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    phone_number: str = Field(alias="phoneNumber")

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryResponse":
        return cls(id=entry.id, name=entry.name, phone_number=entry.phone_number)
