"""FastAPI dependencies for authentication.

This module provides FastAPI dependency injection functions for:
- Extracting and verifying bearer tokens
- Exposing the verified session claim to route handlers
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notehub.core.auth.backend import verify_access_token
from notehub.core.auth.schemas import SessionClaim
from notehub.core.errors import MissingTokenError


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_session_claim(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> SessionClaim:
    """Extract and verify the session claim from the Authorization header.

    Args:
        request: The incoming request
        credentials: Bearer token credentials from the request

    Returns:
        The verified session claim

    Raises:
        MissingTokenError: If no bearer token was sent
        InvalidTokenError: If the token is malformed, badly signed or expired
    """
    if not credentials or not credentials.credentials:
        raise MissingTokenError()

    claim = verify_access_token(credentials.credentials)

    request.state.user_id = claim.user_id
    request.state.tenant_id = claim.tenant_id

    return claim


# Type aliases for cleaner dependency injection
Claim = Annotated[SessionClaim, Depends(get_session_claim)]
