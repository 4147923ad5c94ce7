"""Error Hierarchy - status codes, categories and the REST envelope."""

import pytest

from phonebook.core.errors import (
    ConcurrencyError, DatabaseError, ErrorCategory, ErrorContext,
    HandlerNotFoundError, IdMismatchError, PhoneBookError,
    RequestTimeoutError, ResourceNotFoundError,
)


@pytest.mark.parametrize("error, status, code", [
    (IdMismatchError(1, 2), 400, "ID_MISMATCH"),
    (ResourceNotFoundError("PhoneBookEntry", "9"), 404, "RESOURCE_NOT_FOUND"),
    (HandlerNotFoundError("GetEntryById"), 500, "HANDLER_NOT_FOUND"),
    (ConcurrencyError("conflict"), 500, "CONCURRENCY_CONFLICT"),
    (DatabaseError("down", "execute"), 503, "DATABASE_ERROR"),
    (RequestTimeoutError("GetAllEntries", 1.5), 504, "REQUEST_TIMEOUT"),
])
def test_error_status_and_code(error, status, code):
    assert isinstance(error, PhoneBookError)
    assert error.http_status == status
    assert error.code == code


def test_to_response_envelope_shape():
    err = ResourceNotFoundError(
        "PhoneBookEntry", "42", ErrorContext(entry_id=42),
    )
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "PhoneBookEntry '42' not found"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["context"] == {"message_type": None, "entry_id": 42}
    assert "timestamp" in body


def test_handler_not_found_names_message_type():
    err = HandlerNotFoundError("DeleteEntry")
    assert "DeleteEntry" in err.message
    assert err.context.message_type == "DeleteEntry"
    assert err.category is ErrorCategory.CONFIGURATION


def test_id_mismatch_carries_both_ids():
    err = IdMismatchError(path_id=3, body_id=4)
    assert (err.path_id, err.body_id) == (3, 4)
    assert err.context.entry_id == 3
