"""Error Hierarchy — typed, categorized exceptions for all terminology failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - code is the stable kind tag clients switch on: BAD_REQUEST, RESOURCE_NOT_FOUND, STORE_FAILURE
    - Request errors (400/404) are recoverable; store failures (503) are critical
    - Store failure messages never carry raw driver/engine text

Design Decisions:
    - Single hierarchy with TermServerError base: one FastAPI handler renders all of them
    - Negative answers ("code is not valid", "no translation") are NOT errors:
      validate-code and translate return result=false instead of raising
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
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    resource_type: str | None = None
    debug_info: dict[str, Any] | None = None


class TermServerError(Exception):
    """Base exception for all terminology server errors."""

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
                    "operation": self.context.operation,
                    "resource_type": self.context.resource_type,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class MissingParameterError(TermServerError):
    """A required operation argument was not supplied."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InvalidParameterError(TermServerError):
    """An operation argument was supplied but cannot be used."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(TermServerError):
    """Referenced CodeSystem, ValueSet, ConceptMap or concept does not exist.

    message is passed verbatim; use the factory classmethods for the
    standard wording.
    """
    def __init__(
        self, message: str, resource_type: str, key: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type
        self.key = key

    @classmethod
    def by_url(cls, resource_type: str, url: str) -> "ResourceNotFoundError":
        return cls(f"{resource_type} '{url}' not found", resource_type, url)

    @classmethod
    def by_id(cls, resource_type: str, resource_id: object) -> "ResourceNotFoundError":
        return cls(
            f"{resource_type} {resource_id} not found", resource_type, str(resource_id),
        )

    @classmethod
    def code(cls, code: str, system: str) -> "ResourceNotFoundError":
        return cls(
            f"Code '{code}' not found in system '{system}'", "Concept", code,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TermServerError):
    """Terminology store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Terminology store {operation} failed: {message}",
            "STORE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
