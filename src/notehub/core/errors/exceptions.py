"""Domain exceptions for the application.

These exceptions represent business-logic errors and are automatically
converted to RFC 7807 Problem Details responses by the exception handlers.
"""

from typing import Any

from notehub.core.constants import QUOTA_ERROR_CODE


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Also raised for resources owned by another tenant, so callers
    cannot tell a foreign resource from a missing one.

    Example:
        raise NotFoundError("Note not found", resource="note", resource_id=note_id)
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ValidationError(AppException):
    """Raised when request data fails validation.

    Example:
        raise ValidationError(
            "Title cannot be empty",
            errors=[{"field": "title", "message": "must not be blank"}]
        )
    """

    message = "Validation error"
    error_code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors
        super().__init__(message=message, details=details, **kwargs)


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid.

    Example:
        raise UnauthorizedError("Invalid email or password")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class MissingTokenError(UnauthorizedError):
    """Raised when a protected endpoint is called without a bearer token."""

    message = "Access token required"
    error_code = "missing_token"


class InvalidTokenError(UnauthorizedError):
    """Raised when a bearer token is malformed, badly signed or expired."""

    message = "Invalid or expired token"
    error_code = "invalid_token"


class ForbiddenError(AppException):
    """Raised when user lacks permission to access a resource.

    Example:
        raise ForbiddenError(
            "Insufficient permissions",
            error_code="insufficient_role",
            details={"required_roles": ["admin"]}
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class QuotaExceededError(ForbiddenError):
    """Raised when a tenant's plan does not allow another note.

    The error code is part of the public API: clients branch on it
    to offer an upgrade.
    """

    message = "Free plan limit reached. Upgrade to Pro for unlimited notes."
    error_code = QUOTA_ERROR_CODE


class RateLimitError(AppException):
    """Raised when rate limit is exceeded.

    Example:
        raise RateLimitError(
            "Too many requests",
            details={"retry_after": 60}
        )
    """

    message = "Too many requests, please try again later"
    error_code = "rate_limit_exceeded"
    status_code = 429
