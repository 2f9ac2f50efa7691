"""Rate limiting decorator for per-route configuration.

Allows setting custom rate limits on individual endpoints on top of
the global middleware limit.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from fastapi import Request
from starlette.responses import Response

from notehub.config import settings
from notehub.core.rate_limit.backend import SlidingWindowRateLimiter
from notehub.core.rate_limit.identity import get_identifier
from notehub.core.rate_limit.responses import rate_limited_response


P = ParamSpec("P")
T = TypeVar("T")


def _find_request(args: tuple[object, ...], kwargs: dict[str, object]) -> Request | None:
    for arg in (*args, *kwargs.values()):
        if isinstance(arg, Request):
            return arg
    return None


def rate_limit(
    requests: int | None = None,
    window: int | None = None,
) -> Callable[
    [Callable[P, Awaitable[T]]], Callable[P, Awaitable[T | Response]]
]:
    """Decorator to apply custom rate limits to a route.

    The limiter is taken from `request.app.state.rate_limiter`; the
    decorated route must accept a `request: Request` parameter.

    Args:
        requests: Maximum requests allowed in window (default: from settings)
        window: Time window in seconds (default: from settings)

    Returns:
        Decorated function with rate limiting

    Example:
        @router.post("/auth/login")
        @rate_limit(requests=10, window=60)  # 10 per minute
        async def login(data: LoginRequest, request: Request):
            ...
    """
    limit = requests or settings.rate_limit_requests
    window_seconds = window or settings.rate_limit_window

    def decorator(
        func: Callable[P, Awaitable[T]],
    ) -> Callable[P, Awaitable[T | Response]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T | Response:
            request = _find_request(args, kwargs)
            limiter: SlidingWindowRateLimiter | None = (
                getattr(request.app.state, "rate_limiter", None) if request else None
            )

            if request is None or limiter is None or not settings.rate_limit_enabled:
                return await func(*args, **kwargs)

            result = await limiter.is_allowed(
                identifier=get_identifier(request),
                limit=limit,
                window=window_seconds,
                endpoint=request.url.path,
            )

            if not result.allowed:
                return rate_limited_response(request, result)

            return await func(*args, **kwargs)

        return wrapper

    return decorator
