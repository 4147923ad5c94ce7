"""Mediator - explicit routing from message type to its single handler.

Invariants:
    - Every message->handler mapping is visible in HandlerSet.routes()
    - A Mediator cannot be built from an incomplete HandlerSet: missing
      handlers raise HandlerNotFoundError at construction (startup)
    - send() propagates the handler's result or exception unchanged
    - A deadline expiry cancels the handler and raises RequestTimeoutError

Design Decisions:
    - Explicit dict keyed by message class over reflection or a DI container:
      adding a message requires editing HandlerSet and routes()
    - HandlerSet built once in the app lifespan and handed to the transport
      through app.state; handlers are stateless so one instance serves all
      concurrent requests
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol, overload

from phonebook.core.domain_types import Entry, EntryLookup
from phonebook.core.errors import HandlerNotFoundError, RequestTimeoutError
from phonebook.core.messages import (
    MESSAGE_TYPES,
    CreateEntry, UpdateEntry, DeleteEntry,
    GetAllEntries, GetEntryById, GetEntryByName,
)
from phonebook.services.entry_store import SessionScope
from phonebook.services.handle_commands import (
    CreateEntryHandler, UpdateEntryHandler, DeleteEntryHandler,
)
from phonebook.services.handle_queries import (
    GetAllEntriesHandler, GetEntryByIdHandler, GetEntryByNameHandler,
)

logger = logging.getLogger(__name__)


class MessageHandler(Protocol):
    """Routing-table view of a handler; HandlerSet keeps the concrete types."""
    async def handle(self, message: Any) -> Any: ...


@dataclass(frozen=True)
class HandlerSet:
    """One handler instance per message variant."""
    create_entry: CreateEntryHandler
    update_entry: UpdateEntryHandler
    delete_entry: DeleteEntryHandler
    get_all_entries: GetAllEntriesHandler
    get_entry_by_id: GetEntryByIdHandler
    get_entry_by_name: GetEntryByNameHandler

    def routes(self) -> dict[type, MessageHandler]:
        return {
            # Commands
            CreateEntry: self.create_entry,
            UpdateEntry: self.update_entry,
            DeleteEntry: self.delete_entry,
            # Queries
            GetAllEntries: self.get_all_entries,
            GetEntryById: self.get_entry_by_id,
            GetEntryByName: self.get_entry_by_name,
        }


class Mediator:
    """Routes message -> handler. Explicit registration, checked at construction."""

    def __init__(self, handlers: HandlerSet, timeout_seconds: float | None = None):
        routes = handlers.routes()
        missing = [t.__name__ for t in MESSAGE_TYPES if routes.get(t) is None]
        if missing:
            raise HandlerNotFoundError(", ".join(missing))
        self._routes = routes
        self._timeout_seconds = timeout_seconds

    @overload
    async def send(self, message: CreateEntry, timeout: float | None = None) -> Entry: ...
    @overload
    async def send(self, message: UpdateEntry, timeout: float | None = None) -> bool: ...
    @overload
    async def send(self, message: DeleteEntry, timeout: float | None = None) -> bool: ...
    @overload
    async def send(
        self, message: GetAllEntries, timeout: float | None = None,
    ) -> list[Entry]: ...
    @overload
    async def send(
        self, message: GetEntryById | GetEntryByName, timeout: float | None = None,
    ) -> EntryLookup: ...
    @overload
    async def send(self, message: object, timeout: float | None = None) -> Any: ...

    async def send(self, message: Any, timeout: float | None = None) -> Any:
        """Dispatch message to its handler and return the handler's result.

        timeout overrides the mediator's default deadline (seconds).
        """
        message_type = type(message).__name__
        handler = self._routes.get(type(message))
        if handler is None:
            raise HandlerNotFoundError(message_type)

        logger.debug(
            f"Dispatching {message_type}", extra={"message_type": message_type},
        )
        deadline = timeout if timeout is not None else self._timeout_seconds
        if deadline is None:
            return await handler.handle(message)
        try:
            return await asyncio.wait_for(handler.handle(message), deadline)
        except asyncio.TimeoutError:
            logger.error(
                f"{message_type} timed out after {deadline}s",
                extra={"message_type": message_type},
            )
            raise RequestTimeoutError(message_type, deadline)


def build_handlers(session_scope: SessionScope) -> HandlerSet:
    """Wire every handler against one session scope factory."""
    return HandlerSet(
        create_entry=CreateEntryHandler(session_scope),
        update_entry=UpdateEntryHandler(session_scope),
        delete_entry=DeleteEntryHandler(session_scope),
        get_all_entries=GetAllEntriesHandler(session_scope),
        get_entry_by_id=GetEntryByIdHandler(session_scope),
        get_entry_by_name=GetEntryByNameHandler(session_scope),
    )


def build_mediator(
    session_scope: SessionScope, timeout_seconds: float | None = None,
) -> Mediator:
    return Mediator(build_handlers(session_scope), timeout_seconds)
