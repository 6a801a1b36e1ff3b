"""Error Hierarchy — typed, categorized exceptions for every ledger failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Ledger rule violations are 400-level; infrastructure errors are 500-level
    - Engine errors are raised before any mutation, so a failed call changes nothing
    - to_response() produces the REST envelope used by the global handlers

Design Decisions:
    - Single hierarchy with LedgerError base: one FastAPI handler catches all
    - InvalidStateError groups the state-machine violations so callers can catch them together
    - Messages reuse the original order system wording ("Order not confirmed", ...)
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
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    identity: str | None = None
    order_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all ledger errors."""

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
                    "identity": self.context.identity,
                    "order_id": self.context.order_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(LedgerError):
    """Empty required text, zero amount, or null identity."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class NotFoundError(LedgerError):
    """Missing profile or order."""
    def __init__(
        self, resource_type: str, resource_id: str,
        message: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnauthorizedError(LedgerError):
    """Caller is not the identity the operation requires."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )


class PreconditionFailedError(LedgerError):
    """Profile deletion blocked by active orders."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PRECONDITION_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class InvalidStateError(LedgerError):
    """Order state-machine precondition violated."""
    def __init__(
        self, message: str, code: str = "INVALID_STATE",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AlreadyInStateError(InvalidStateError):
    """Order is already past the state the transition starts from."""
    def __init__(self, message: str = "Order already confirmed", context: ErrorContext | None = None):
        super().__init__(message, "ALREADY_IN_STATE", context)


class AlreadyCancelledError(InvalidStateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Order already cancelled", "ALREADY_CANCELLED", context)


class AlreadyDeliveredError(InvalidStateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Order already delivered", "ALREADY_DELIVERED", context)


class NotConfirmedError(InvalidStateError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Order not confirmed", "NOT_CONFIRMED", context)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LedgerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
