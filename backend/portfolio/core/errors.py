"""Error Hierarchy — typed, categorized exceptions for every API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PortfolioError base: one global handler catches all
    - ErrorContext as dataclass: observability fields travel with the error, not the logger
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
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    resource_id: str | None = None
    user_id: str | None = None
    details: list[dict[str, Any]] | None = None


class PortfolioError(Exception):
    """Base exception for all portfolio API errors."""

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
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.resource:
            body["resource"] = self.context.resource
            body["resource_id"] = self.context.resource_id
        if self.context.details:
            body["details"] = self.context.details
        return {"error": body}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailedError(PortfolioError):
    """Business-level validation failed after schema validation passed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details = [{"field": field, "message": message}]
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class AuthenticationError(PortfolioError):
    """Missing, malformed, or expired credentials."""
    def __init__(
        self, message: str = "Not authenticated", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(PortfolioError):
    """Authenticated user lacks the role required for the operation."""
    def __init__(self, required_role: str, context: ErrorContext | None = None):
        super().__init__(
            f"Operation requires role '{required_role}'",
            "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_role = required_role


class ResourceNotFoundError(PortfolioError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class ConflictError(PortfolioError):
    """Write would violate a uniqueness rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class PayloadTooLargeError(PortfolioError):
    """Uploaded file exceeds the configured size limit."""
    def __init__(self, size: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"File is {size} bytes; limit is {limit} bytes",
            "PAYLOAD_TOO_LARGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 413,
        )
        self.size = size
        self.limit = limit


class FeatureDisabledError(PortfolioError):
    """A site feature is switched off in the configuration."""
    def __init__(self, feature: str, context: ErrorContext | None = None):
        super().__init__(
            f"{feature} is currently unavailable",
            "FEATURE_DISABLED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 503,
        )
        self.feature = feature


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PortfolioError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class MediaServiceError(PortfolioError):
    """Media host rejected or failed an upload/destroy call."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Media {operation} failed: {message}",
            "MEDIA_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.operation = operation


class MediaNotConfiguredError(PortfolioError):
    """Media host credentials are missing from settings."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Media uploads are not configured",
            "MEDIA_NOT_CONFIGURED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
