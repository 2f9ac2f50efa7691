"""In-process sliding window rate limiter.

Each identifier keeps a deque of request timestamps. Timestamps older
than the window are dropped on every check, so the count always covers
exactly the last `window` seconds. Every `sweep_interval` seconds the
buckets with no request inside their window are dropped, so memory
follows the clients active in the last window only.
"""

import asyncio
import math
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class _Bucket:
    """Timestamps recorded for one key and the window they were counted in."""

    window: int
    hits: deque[float] = field(default_factory=deque)

    def prune(self, now: float) -> None:
        cutoff = now - self.window
        while self.hits and self.hits[0] <= cutoff:
            self.hits.popleft()


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate limit check.

    Attributes:
        allowed: Whether the request may proceed
        limit: Maximum requests in the window
        remaining: Requests left in the current window
        reset_time: Unix time at which the oldest counted request expires
        retry_after: Seconds to wait before retrying (None when allowed)
    """

    allowed: bool
    limit: int
    remaining: int
    reset_time: int
    retry_after: int | None = None


class SlidingWindowRateLimiter:
    """Sliding window log limiter keyed by identifier and endpoint.

    State lives in the process, one instance per application.
    """

    def __init__(
        self,
        prefix: str = "ratelimit",
        clock: Callable[[], float] = time.time,
        sweep_interval: float = 60.0,
    ) -> None:
        self.prefix = prefix
        self.clock = clock
        self.sweep_interval = sweep_interval
        self._hits: dict[str, _Bucket] = {}
        self._last_sweep = clock()
        self._lock = asyncio.Lock()

    def _build_key(self, identifier: str, endpoint: str | None = None) -> str:
        """Build the bucket key for an identifier, optionally per endpoint."""
        key = f"{self.prefix}:{identifier}"
        if endpoint:
            key = f"{key}:{endpoint.strip('/').replace('/', '_')}"
        return key

    async def is_allowed(
        self,
        identifier: str,
        limit: int,
        window: int,
        endpoint: str | None = None,
    ) -> RateLimitResult:
        """Record a request and decide whether it is within the limit.

        Rejected requests are not recorded, so a client that backs off
        regains capacity as soon as its oldest request ages out.

        Args:
            identifier: Who is making the request (user:{id} or ip:{addr})
            limit: Maximum requests in the window
            window: Window length in seconds
            endpoint: Optional path for a per-route bucket

        Returns:
            RateLimitResult with the decision and header values
        """
        key = self._build_key(identifier, endpoint)

        async with self._lock:
            now = self.clock()
            if now - self._last_sweep >= self.sweep_interval:
                self._sweep(now)

            bucket = self._hits.get(key)
            if bucket is None:
                bucket = self._hits[key] = _Bucket(window=window)
            bucket.window = window
            bucket.prune(now)
            hits = bucket.hits

            if len(hits) >= limit:
                oldest = hits[0]
                retry_after = max(1, math.ceil(oldest + window - now))
                return RateLimitResult(
                    allowed=False,
                    limit=limit,
                    remaining=0,
                    reset_time=math.ceil(oldest + window),
                    retry_after=retry_after,
                )

            hits.append(now)
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=limit - len(hits),
                reset_time=math.ceil(hits[0] + window),
            )

    async def reset(self, identifier: str | None = None) -> None:
        """Forget recorded requests for one identifier, or for everyone."""
        async with self._lock:
            if identifier is None:
                self._hits.clear()
                return
            prefix = self._build_key(identifier)
            for key in [k for k in self._hits if k == prefix or k.startswith(f"{prefix}:")]:
                del self._hits[key]

    def _sweep(self, now: float) -> None:
        """Drop every bucket with no request inside its window."""
        stale = [
            key
            for key, bucket in self._hits.items()
            if not bucket.hits or bucket.hits[-1] <= now - bucket.window
        ]
        for key in stale:
            del self._hits[key]
        self._last_sweep = now
