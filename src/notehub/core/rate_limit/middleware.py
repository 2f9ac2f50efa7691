"""Rate limiting middleware for global request limits.

Applies rate limits to all requests based on user ID (authenticated)
or IP address (unauthenticated).
"""

from typing import TYPE_CHECKING, ClassVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notehub.config import settings
from notehub.core.rate_limit.backend import SlidingWindowRateLimiter
from notehub.core.rate_limit.identity import get_identifier
from notehub.core.rate_limit.responses import rate_limit_headers, rate_limited_response


if TYPE_CHECKING:
    from starlette.types import ASGIApp


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware that applies global rate limits to all requests.

    Adds standard rate limit headers to every limited response.
    """

    # Paths to exclude from rate limiting
    EXCLUDED_PATHS: ClassVar[set[str]] = {
        "/health",
        "/health/ready",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    def __init__(
        self,
        app: "ASGIApp",
        limiter: SlidingWindowRateLimiter,
        requests: int | None = None,
        window: int | None = None,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.requests = requests or settings.rate_limit_requests
        self.window = window or settings.rate_limit_window

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request and apply rate limiting.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response with rate limit headers
        """
        if request.url.path in self.EXCLUDED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        result = await self.limiter.is_allowed(
            identifier=get_identifier(request),
            limit=self.requests,
            window=self.window,
        )

        if not result.allowed:
            return rate_limited_response(request, result)

        response = await call_next(request)
        for name, value in rate_limit_headers(result).items():
            response.headers[name] = value

        return response
