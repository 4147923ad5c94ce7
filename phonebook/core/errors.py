"""Error Hierarchy - typed, categorized exceptions for all phonebook failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are expected outcomes; wiring, conflict and
      infrastructure errors (500-level) are logged for operators
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PhoneBookError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
    - Not-found is NOT raised by handlers (they return Missing/False); routes
      raise ResourceNotFoundError when turning a result into a response
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFIGURATION = "configuration"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    message_type: str | None = None
    entry_id: int | None = None
    debug_info: dict[str, Any] | None = None


class PhoneBookError(Exception):
    """Base exception for all phonebook errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "message_type": self.context.message_type,
                    "entry_id": self.context.entry_id,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class IdMismatchError(PhoneBookError):
    """Body id disagrees with the id in the request path."""
    def __init__(self, path_id: int, body_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(entry_id=path_id)
        super().__init__(
            f"Entry id in body ({body_id}) does not match path id ({path_id})",
            "ID_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.path_id = path_id
        self.body_id = body_id


class ResourceNotFoundError(PhoneBookError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


# ─── Wiring & Infrastructure Errors (500-level) ─────────────────

class HandlerNotFoundError(PhoneBookError):
    """No handler wired for a message type. Deployment defect."""
    def __init__(self, message_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.message_type = message_type
        super().__init__(
            f"No handler registered for {message_type}",
            "HANDLER_NOT_FOUND", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.message_type = message_type


class ConcurrencyError(PhoneBookError):
    """Concurrent modification persisted after the existence re-check."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 500,
        )


class DatabaseError(PhoneBookError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class RequestTimeoutError(PhoneBookError):
    """Handler did not finish before the request deadline."""
    def __init__(self, message_type: str, timeout_seconds: float,
                 context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.message_type = message_type
        super().__init__(
            f"{message_type} did not complete within {timeout_seconds}s",
            "REQUEST_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, ctx, 504,
        )
        self.timeout_seconds = timeout_seconds
