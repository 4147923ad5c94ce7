"""PhoneBook Routes - HTTP contract over the wired Mediator.

Invariants:
    - POST 201 + Location, PUT/DELETE 204, absent -> 404
    - Validation failures and id mismatches -> 400 before any handler runs
    - Wire format uses phoneNumber
"""

from dataclasses import replace

import pytest

from phonebook.core.errors import ConcurrencyError
from phonebook.services.mediator import Mediator, build_handlers

JOHN = {"name": "John Doe", "phoneNumber": "123-456-7890"}
JANE = {"name": "Jane Smith", "phoneNumber": "987-654-3210"}


async def test_list_empty_returns_200_and_empty_list(client):
    res = await client.get("/api/PhoneBook")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_returns_201_with_location_and_body(client):
    res = await client.post("/api/PhoneBook", json=JOHN)

    assert res.status_code == 201
    assert res.json() == {"id": 1, "name": "John Doe", "phoneNumber": "123-456-7890"}
    assert res.headers["location"] == "http://test/api/PhoneBook/1"


async def test_create_two_then_list_returns_both(client):
    await client.post("/api/PhoneBook", json=JOHN)
    await client.post("/api/PhoneBook", json=JANE)

    res = await client.get("/api/PhoneBook")

    assert res.status_code == 200
    assert len(res.json()) == 2
    assert [e["name"] for e in res.json()] == ["John Doe", "Jane Smith"]


async def test_get_by_id_returns_entry(client):
    created = (await client.post("/api/PhoneBook", json=JOHN)).json()

    res = await client.get(f"/api/PhoneBook/{created['id']}")

    assert res.status_code == 200
    assert res.json() == created


async def test_get_by_id_absent_returns_404_envelope(client):
    res = await client.get("/api/PhoneBook/999")

    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "RESOURCE_NOT_FOUND"
    assert error["context"]["entry_id"] == 999


async def test_get_by_id_non_integer_returns_400(client):
    res = await client.get("/api/PhoneBook/abc")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_get_by_name_case_insensitive(client):
    await client.post("/api/PhoneBook", json=JOHN)

    res = await client.get("/api/PhoneBook/ByName/john doe")

    assert res.status_code == 200
    assert res.json()["name"] == "John Doe"


async def test_get_by_name_absent_returns_404(client):
    res = await client.get("/api/PhoneBook/ByName/NonExistent")
    assert res.status_code == 404


@pytest.mark.parametrize("body", [
    {"name": "", "phoneNumber": "123"},
    {"name": "   ", "phoneNumber": "123"},
    {"name": "x" * 101, "phoneNumber": "123"},
    {"name": "John Doe", "phoneNumber": "not a phone"},
    {"name": "John Doe", "phoneNumber": "1" * 21},
    {"name": "John Doe"},
    {"phoneNumber": "123"},
])
async def test_create_invalid_body_returns_400(client, body):
    res = await client.post("/api/PhoneBook", json=body)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await client.get("/api/PhoneBook")).json() == []


async def test_update_existing_returns_204_and_persists(client):
    created = (await client.post("/api/PhoneBook", json=JOHN)).json()

    res = await client.put(
        f"/api/PhoneBook/{created['id']}",
        json={"name": "John Doe", "phoneNumber": "555-0100"},
    )

    assert res.status_code == 204
    assert res.content == b""
    fetched = (await client.get(f"/api/PhoneBook/{created['id']}")).json()
    assert fetched == {"id": created["id"], "name": "John Doe", "phoneNumber": "555-0100"}


async def test_update_absent_returns_404_and_store_unchanged(client):
    await client.post("/api/PhoneBook", json=JOHN)

    res = await client.put("/api/PhoneBook/999", json=JANE)

    assert res.status_code == 404
    assert len((await client.get("/api/PhoneBook")).json()) == 1


async def test_update_with_mismatched_body_id_returns_400(client):
    created = (await client.post("/api/PhoneBook", json=JOHN)).json()

    res = await client.put(
        f"/api/PhoneBook/{created['id']}", json={**JANE, "id": created["id"] + 1},
    )

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ID_MISMATCH"
    fetched = (await client.get(f"/api/PhoneBook/{created['id']}")).json()
    assert fetched["name"] == "John Doe"


async def test_update_with_matching_body_id_is_accepted(client):
    created = (await client.post("/api/PhoneBook", json=JOHN)).json()

    res = await client.put(
        f"/api/PhoneBook/{created['id']}", json={**JANE, "id": created["id"]},
    )

    assert res.status_code == 204


async def test_update_invalid_body_returns_400(client):
    created = (await client.post("/api/PhoneBook", json=JOHN)).json()

    res = await client.put(
        f"/api/PhoneBook/{created['id']}", json={"name": "John", "phoneNumber": "abc"},
    )

    assert res.status_code == 400


async def test_delete_existing_returns_204_then_404(client):
    created = (await client.post("/api/PhoneBook", json=JOHN)).json()

    res = await client.delete(f"/api/PhoneBook/{created['id']}")

    assert res.status_code == 204
    assert (await client.get(f"/api/PhoneBook/{created['id']}")).status_code == 404


async def test_delete_absent_returns_404(client):
    res = await client.delete("/api/PhoneBook/999")
    assert res.status_code == 404


async def test_unresolved_conflict_returns_500_envelope(
    client, test_session_factory, override_mediator,
):
    class _Conflicting:
        async def handle(self, message):
            raise ConcurrencyError("Entry 1 was modified concurrently during update")

    handlers = build_handlers(test_session_factory)
    override_mediator(Mediator(replace(handlers, update_entry=_Conflicting())))

    res = await client.put("/api/PhoneBook/1", json=JOHN)

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CONCURRENCY_CONFLICT"
