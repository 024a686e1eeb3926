"""Error Hierarchy — typed, categorized exceptions for every storefront failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - http_status is decided by the error kind, never by matching message text
    - to_response() produces the REST envelope {"error", "code", "category"}
    - Services raise these; routes and the global handler translate them once

Design Decisions:
    - Single hierarchy with StorefrontError base: one FastAPI handler catches all
    - ReferenceNotFoundError (400) is distinct from ResourceNotFoundError (404):
      a missing parent/referenced record makes the request invalid, a missing
      addressed record is a 404
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error kinds carried across the service boundary."""
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_SUPPORTED = "not_supported"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(StorefrontError):
    """Request field missing or semantically invalid."""
    def __init__(self, message: str, code: str, field: str | None = None):
        super().__init__(
            message, code, ErrorCategory.INVALID_INPUT,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class ResourceNotFoundError(StorefrontError):
    """Addressed resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str | None = None, code: str | None = None):
        super().__init__(
            f"{resource_type} not found",
            code or _not_found_code(resource_type),
            ErrorCategory.NOT_FOUND, ErrorSeverity.WARNING, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ReferenceNotFoundError(StorefrontError):
    """Record referenced by the request body does not exist."""
    def __init__(self, resource_type: str, resource_id: str | None = None):
        super().__init__(
            f"{resource_type} not found",
            _not_found_code(resource_type),
            ErrorCategory.INVALID_INPUT, ErrorSeverity.WARNING, 400,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(StorefrontError):
    """Uniqueness constraint would be violated."""
    def __init__(self, message: str, code: str, http_status: int = 409):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, http_status,
        )


class DuplicateSlugError(ConflictError):
    """Category slug already taken. Reported as 400 for compatibility."""
    def __init__(self, slug: str):
        super().__init__(
            "Category with this name already exists", "DUPLICATE_SLUG", 400,
        )
        self.slug = slug


class BusinessRuleError(StorefrontError):
    """Operation refused by a domain rule."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, 400,
        )


class AuthenticationError(StorefrontError):
    """Credentials or session token missing, malformed or rejected."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, 401,
        )


class InvalidTokenError(AuthenticationError):
    """Session token failed verification."""
    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, "INVALID_TOKEN")


class PermissionDeniedError(StorefrontError):
    """Authenticated user lacks the required role."""
    def __init__(self, message: str = "Admin access required"):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, 403,
        )


class NotSupportedError(StorefrontError):
    """HTTP verb intentionally unsupported for a resource."""
    def __init__(self, message: str):
        super().__init__(
            message, "NOT_SUPPORTED", ErrorCategory.NOT_SUPPORTED,
            ErrorSeverity.INFO, 405,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class DatabaseError(StorefrontError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.UPSTREAM,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation


class ServiceFailureError(StorefrontError):
    """Operation failed for a reason the caller cannot fix."""
    def __init__(self, message: str, code: str):
        super().__init__(
            message, code, ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )


def _not_found_code(resource_type: str) -> str:
    """'Cart item' -> 'CART_ITEM_NOT_FOUND'."""
    return resource_type.upper().replace(" ", "_") + "_NOT_FOUND"
