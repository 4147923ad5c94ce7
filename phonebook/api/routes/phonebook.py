"""PhoneBook Routes - decode HTTP into messages, encode results into responses.

Invariants:
    - Routes never touch storage; every operation goes through Mediator.send
    - Missing / False results become 404 (ResourceNotFoundError)
    - Body validation happens in the schemas before any message is built
    - PUT with a body id different from the path id is rejected (400)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from phonebook.core.domain_types import EntryId, Found, Missing
from phonebook.core.errors import ErrorContext, IdMismatchError, ResourceNotFoundError
from phonebook.core.messages import (
    CreateEntry, UpdateEntry, DeleteEntry,
    GetAllEntries, GetEntryById, GetEntryByName,
)
from phonebook.schemas.entry import EntryCreate, EntryResponse, EntryUpdate
from phonebook.services.mediator import Mediator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/PhoneBook", tags=["phonebook"])


def get_mediator(request: Request) -> Mediator:
    """FastAPI dependency: the mediator wired in the app lifespan."""
    mediator = getattr(request.app.state, "mediator", None)
    if mediator is None:
        raise RuntimeError("Mediator not initialized")
    return mediator


def _not_found(entry_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "PhoneBookEntry", str(entry_id), ErrorContext(entry_id=entry_id),
    )


@router.get("", response_model=list[EntryResponse])
async def list_entries(mediator: Mediator = Depends(get_mediator)):
    """All entries, ordered by id."""
    entries = await mediator.send(GetAllEntries())
    return [EntryResponse.from_entry(e) for e in entries]


@router.get("/ByName/{name}", response_model=EntryResponse)
async def get_entry_by_name(name: str, mediator: Mediator = Depends(get_mediator)):
    match await mediator.send(GetEntryByName(name)):
        case Found(entry):
            return EntryResponse.from_entry(entry)
        case Missing():
            raise ResourceNotFoundError("PhoneBookEntry", name)


@router.get("/{entry_id}", response_model=EntryResponse)
async def get_entry(entry_id: int, mediator: Mediator = Depends(get_mediator)):
    match await mediator.send(GetEntryById(EntryId(entry_id))):
        case Found(entry):
            return EntryResponse.from_entry(entry)
        case Missing():
            raise _not_found(entry_id)


@router.post(
    "", response_model=EntryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_entry(
    body: EntryCreate,
    request: Request,
    response: Response,
    mediator: Mediator = Depends(get_mediator),
):
    """Create an entry. Location header points at GET /api/PhoneBook/{id}."""
    entry = await mediator.send(CreateEntry(body.to_new_entry()))
    response.headers["Location"] = str(
        request.url_for("get_entry", entry_id=entry.id),
    )
    return EntryResponse.from_entry(entry)


@router.put(
    "/{entry_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_entry(
    entry_id: int, body: EntryUpdate, mediator: Mediator = Depends(get_mediator),
):
    if body.id is not None and body.id != entry_id:
        raise IdMismatchError(entry_id, body.id)
    updated = await mediator.send(
        UpdateEntry(EntryId(entry_id), body.to_new_entry()),
    )
    if not updated:
        raise _not_found(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{entry_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_entry(entry_id: int, mediator: Mediator = Depends(get_mediator)):
    if not await mediator.send(DeleteEntry(EntryId(entry_id))):
        raise _not_found(entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
