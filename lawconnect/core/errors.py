"""Error Hierarchy — typed, categorized exceptions for all LawConnect failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope with a top-level "message"
    - No internal details leaked in user-facing messages
    - AggregateRecomputeFailed is never raised to a caller — it is built only to be logged

Design Decisions:
    - Single hierarchy with LawConnectError base: FastAPI global handler catches all
    - Rule functions in core/enforce_*.py RETURN these instances instead of raising,
      so checks chain with `or`; the service layer raises whatever comes back
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class LawConnectError(Exception):
    """Base exception for all LawConnect errors."""

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
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(LawConnectError):
    """Field constraint violated — range, enum membership, required field, transition."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AuthenticationError(LawConnectError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "Not authenticated", context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(LawConnectError):
    """Actor lacks permission for the requested mutation."""
    def __init__(
        self,
        message: str = "Not authorized to perform this action",
        code: str = "FORBIDDEN",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class OnlyLawyersCanBidError(ForbiddenError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only lawyers can place bids", "ONLY_LAWYERS_CAN_BID", context,
        )


class OnlyClientsCanReviewError(ForbiddenError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only clients can leave reviews", "ONLY_CLIENTS_CAN_REVIEW", context,
        )


class NoCompletedEngagementError(ForbiddenError):
    """Reviewer has no completed case whose accepted bid belongs to the lawyer."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You can only review lawyers you've worked with on a completed case",
            "NO_COMPLETED_ENGAGEMENT", context,
        )


class OnlyLawyersHaveProfilesError(ForbiddenError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Only lawyers can have a lawyer profile",
            "ONLY_LAWYERS_HAVE_PROFILES", context,
        )


class ResourceNotFoundError(LawConnectError):
    """Requested resource does not exist or is outside the actor's scope."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class DuplicateConstraintError(LawConnectError):
    """Uniqueness violation detected before the write."""
    def __init__(
        self, message: str, code: str = "DUPLICATE", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class DuplicateBidError(DuplicateConstraintError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You have already placed a bid on this case", "DUPLICATE_BID", context,
        )


class DuplicateReviewError(DuplicateConstraintError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You have already reviewed this lawyer for this case",
            "DUPLICATE_REVIEW", context,
        )


class DuplicateEmailError(DuplicateConstraintError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An account with this email already exists", "DUPLICATE_EMAIL", context,
        )


class DuplicateProfileError(DuplicateConstraintError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This lawyer already has a profile", "DUPLICATE_PROFILE", context,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LawConnectError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class AggregateRecomputeFailed(LawConnectError):
    """Derived statistic could not be refreshed. Logged, never surfaced."""
    def __init__(
        self, aggregate: str, target_id: str, reason: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = target_id
        super().__init__(
            f"Recompute of {aggregate} for {target_id} failed: {reason}",
            "AGGREGATE_RECOMPUTE_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, ctx, 500,
        )
        self.aggregate = aggregate
