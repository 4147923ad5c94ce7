"""Domain Types - verifies Entry values, lookup results and phone format.

Tests:
    - Entry/NewEntry are immutable
    - Found/Missing compare by value and support pattern matching
    - is_phone_number accepts common formats, rejects text
"""

from dataclasses import FrozenInstanceError

import pytest

from phonebook.core.domain_types import (
    Entry, EntryId, Found, Missing, NewEntry, is_phone_number,
)


def test_entry_is_frozen():
    entry = Entry(EntryId(1), "John Doe", "123-456-7890")
    with pytest.raises(FrozenInstanceError):
        entry.name = "Jane"


def test_new_entry_has_no_id():
    assert not hasattr(NewEntry("John Doe", "123"), "id")


def test_lookup_results_compare_by_value():
    entry = Entry(EntryId(1), "John Doe", "123")
    assert Found(entry) == Found(Entry(EntryId(1), "John Doe", "123"))
    assert Missing() == Missing()
    assert Found(entry) != Missing()


def test_lookup_results_pattern_match():
    entry = Entry(EntryId(3), "Jane Smith", "987")

    def describe(lookup):
        match lookup:
            case Found(e):
                return e.name
            case Missing():
                return "missing"

    assert describe(Found(entry)) == "Jane Smith"
    assert describe(Missing()) == "missing"


@pytest.mark.parametrize("value", [
    "123-456-7890",
    "987-654-3210",
    "+1 (555) 123-4567",
    "555.123.4567",
    "5551234",
    "555-1234 x12",
    "555-1234 ext. 9",
])
def test_is_phone_number_accepts(value):
    assert is_phone_number(value)


@pytest.mark.parametrize("value", [
    "",
    "abc",
    "not a phone",
    "+",
    "555-abc-1234",
])
def test_is_phone_number_rejects(value):
    assert not is_phone_number(value)
