"""Session context middleware.

Resolves the bearer token once per request so that components running
before the route dependencies (rate limiting, access logging) know who
is calling. Routes still authenticate through the `Claim` dependency.
"""

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from notehub.core.auth.backend import decode_token
from notehub.core.auth.schemas import SessionClaim


def claim_from_headers(request: Request) -> SessionClaim | None:
    """Decode the bearer token of a request, None if absent or invalid."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return decode_token(token.strip())


class SessionContextMiddleware(BaseHTTPMiddleware):
    """Expose the caller's tenant and user on `request.state`.

    Sets `tenant_id`, `user_id` and `role` for a valid token and binds
    them into the structlog context. Anonymous requests and bad tokens
    pass through untouched; the route decides whether that is an error.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        claim = claim_from_headers(request)
        if claim is None:
            return await call_next(request)

        request.state.tenant_id = claim.tenant_id
        request.state.user_id = claim.user_id
        request.state.role = str(claim.role)
        structlog.contextvars.bind_contextvars(
            tenant_id=claim.tenant_id,
            user_id=claim.user_id,
        )
        try:
            return await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("tenant_id", "user_id")
