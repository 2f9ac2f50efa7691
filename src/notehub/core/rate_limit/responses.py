"""429 problem response shared by the middleware and the decorator."""

from starlette.requests import Request
from starlette.responses import JSONResponse

from notehub.core.errors import RateLimitError, problem_response
from notehub.core.rate_limit.backend import RateLimitResult


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    """Standard X-RateLimit-* headers for a check result."""
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_time),
    }


def rate_limited_response(request: Request, result: RateLimitResult) -> JSONResponse:
    """Render a rejected check as a 429 problem document."""
    error = RateLimitError()
    headers = rate_limit_headers(result)
    headers["Retry-After"] = str(result.retry_after)
    return problem_response(
        request,
        status_code=error.status_code,
        error_code=error.error_code,
        title="Too Many Requests",
        detail=error.message,
        headers=headers,
        extra={"retryAfter": result.retry_after},
    )
