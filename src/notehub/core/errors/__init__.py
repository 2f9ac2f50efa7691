"""Error handling module with RFC 7807 Problem Details."""

from notehub.core.errors.exceptions import (
    AppException,
    ForbiddenError,
    InvalidTokenError,
    MissingTokenError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    UnauthorizedError,
    ValidationError,
)
from notehub.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    problem_response,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "InvalidTokenError",
    "MissingTokenError",
    "NotFoundError",
    "ProblemDetail",
    "QuotaExceededError",
    "RateLimitError",
    "UnauthorizedError",
    "ValidationError",
    "problem_response",
    "register_exception_handlers",
]
