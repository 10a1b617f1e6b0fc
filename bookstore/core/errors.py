"""Error Hierarchy — typed, categorized exceptions for every bookstore failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are 400-level; infrastructure and gateway errors are 500-level
    - to_response() produces the REST envelope shared by the API and the gateway
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BookstoreError base: one global handler per app
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    DATABASE = "database"
    GATEWAY = "gateway"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    book_id: int | None = None
    path: str | None = None
    upstream: str | None = None
    debug_info: dict[str, Any] | None = None


class BookstoreError(Exception):
    """Base exception for all bookstore errors."""

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
                    "book_id": self.context.book_id,
                    "path": self.context.path,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BookNotFoundError(BookstoreError):
    """Operation targeted a Book Id that does not exist."""
    def __init__(self, book_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.book_id = book_id
        super().__init__(
            f"Book '{book_id}' not found",
            "BOOK_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.book_id = book_id


class BookIdMismatchError(BookstoreError):
    """Update path Id differs from the Id carried in the body."""
    def __init__(
        self, path_id: int, body_id: int | None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.book_id = path_id
        super().__init__(
            f"Path id {path_id} does not match body id {body_id}",
            "BOOK_ID_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.path_id = path_id
        self.body_id = body_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BookstoreError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Gateway Errors ─────────────────────────────────────────────

class RouteNotFoundError(BookstoreError):
    """No gateway route matches the request."""
    def __init__(self, method: str, path: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.path = path
        super().__init__(
            f"No route for {method} {path}",
            "ROUTE_NOT_FOUND", ErrorCategory.GATEWAY,
            ErrorSeverity.WARNING, ctx, 404,
        )


class UpstreamUnavailableError(BookstoreError):
    """Downstream service could not be reached."""
    def __init__(self, upstream: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.upstream = upstream
        super().__init__(
            "Upstream service unavailable",
            "UPSTREAM_UNAVAILABLE", ErrorCategory.GATEWAY,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
