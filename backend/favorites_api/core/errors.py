"""Error Hierarchy - typed, categorized exceptions for every Favorites API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - BadInputError is 400, FavoriteNotFoundError is 404, StorageFailureError is 500
    - to_response() produces the REST envelope used by all error responses
    - StorageFailureError carries the raw driver message in its user-facing text

Design Decisions:
    - Single hierarchy with FavoritesError base: one FastAPI handler catches all
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request-scoped details attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    favorite_id: int | None = None
    session_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class FavoritesError(Exception):
    """Base exception for all Favorites API errors."""

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
                    "favorite_id": self.context.favorite_id,
                    "session_id": self.context.session_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadInputError(FavoritesError):
    """Malformed path, query, or body input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class FavoriteNotFoundError(FavoritesError):
    """No favorite matched a lookup by identifying fields."""
    def __init__(
        self, session_id: str, name: str, image_url: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.session_id = session_id
        super().__init__(
            f"No favorite for session '{session_id}' with name '{name}' "
            f"and image '{image_url}'",
            "FAVORITE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFailureError(FavoritesError):
    """Any database error. The driver message is exposed to the client."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            detail, "STORAGE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.detail = detail
        self.operation = operation
