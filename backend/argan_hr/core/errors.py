"""Error Hierarchy — typed, categorized exceptions for every Argan HR failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) are recoverable; infrastructure errors (5xx) are critical
    - to_response() produces the single REST envelope used by every handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ArganError base: one FastAPI handler catches all (ADR: uniform error shape)
    - FieldValidationError carries every failing field at once so forms can show them together
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
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    admin_id: str | None = None
    client_id: int | None = None
    details: list[dict[str, Any]] | None = None
    retry_after_seconds: int | None = None
    debug_info: dict[str, Any] | None = None


class ArganError(Exception):
    """Base exception for all Argan HR errors."""

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
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.details:
            body["details"] = self.context.details
        if self.context.retry_after_seconds is not None:
            body["retry_after_seconds"] = self.context.retry_after_seconds
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(ArganError):
    """Single input value rejected by a domain rule."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        if field and not ctx.details:
            ctx.details = [{"field": field, "message": message}]
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class FieldValidationError(ArganError):
    """Several form fields failed validation at once."""
    def __init__(
        self, errors: list[dict[str, str]], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(
            f"Invalid fields: {fields}",
            "FIELD_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.errors = errors


class BusinessRuleError(ArganError):
    """Request is well-formed but breaks a domain rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BUSINESS_RULE_VIOLATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 422,
        )


class AuthenticationError(ArganError):
    """No valid admin session."""
    def __init__(
        self, message: str = "Authentication required",
        code: str = "AUTHENTICATION_REQUIRED",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Email/password pair rejected. Never says which half was wrong."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email or password", "INVALID_CREDENTIALS", context,
        )


class InsufficientPermissionsError(ArganError):
    """Admin role below what the action needs."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Insufficient permissions to {action.replace('_', ' ')}",
            "INSUFFICIENT_PERMISSIONS", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.action = action


class ResourceNotFoundError(ArganError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class ConflictError(ArganError):
    """State conflict: duplicate or concurrent modification."""
    def __init__(
        self, message: str, code: str = "CONFLICT",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already in use by another active record."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email '{email}' is already in use",
            "EMAIL_ALREADY_EXISTS", context,
        )
        self.email = email


class RateLimitExceededError(ArganError):
    """Too many attempts in the current window."""
    def __init__(
        self, retry_after_seconds: int, message: str = "Too many requests",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(
            message, "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, ctx, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ArganError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
