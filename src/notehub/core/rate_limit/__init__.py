"""Rate limiting with an in-process sliding window.

Provides per-user and per-IP rate limiting with configurable
limits and time windows.
"""

from notehub.core.rate_limit.backend import RateLimitResult, SlidingWindowRateLimiter
from notehub.core.rate_limit.decorators import rate_limit
from notehub.core.rate_limit.identity import get_identifier
from notehub.core.rate_limit.middleware import RateLimitMiddleware


__all__ = [
    "RateLimitMiddleware",
    "RateLimitResult",
    "SlidingWindowRateLimiter",
    "get_identifier",
    "rate_limit",
]
