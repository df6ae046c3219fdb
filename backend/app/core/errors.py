"""Error Hierarchy - typed, categorized exceptions for all Sortboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Stale references in steady-state sorter operations are NOT errors (they are no-ops)
    - Load failures keep the underlying message so it can be shown to the user
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with SortboardError base: one FastAPI handler catches all
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
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    board: str | None = None
    item_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SortboardError(Exception):
    """Base exception for all Sortboard errors."""

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
                    "board": self.context.board,
                    "item_id": self.context.item_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidBoardDataError(SortboardError):
    """Records cannot seed a sorter (duplicate ids, no categories)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_BOARD_DATA", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )


class BoardNotFoundError(SortboardError):
    """Requested board does not exist."""
    def __init__(self, board: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.board = board
        super().__init__(
            f"Board '{board}' not found",
            "BOARD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class BoardNotReadyError(SortboardError):
    """Mutation attempted on a board that is still loading or failed to load."""
    def __init__(self, board: str, status: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.board = board
        super().__init__(
            f"Board '{board}' is not ready (status: {status})",
            "BOARD_NOT_READY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.status = status


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UserDirectoryError(SortboardError):
    """Remote user directory fetch failed (network, status, or payload)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "USER_DIRECTORY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class CatalogLoadError(SortboardError):
    """Static produce catalog missing or malformed."""
    def __init__(self, message: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to load catalog {path}: {message}",
            "CATALOG_LOAD_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.path = path


class TimerAlreadyArmedError(SortboardError):
    """A second return timer was armed for an item that is already away."""
    def __init__(self, item_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.item_id = item_id
        super().__init__(
            f"Return timer already armed for item '{item_id}'",
            "TIMER_ALREADY_ARMED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
