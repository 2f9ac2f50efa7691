"""Authentication API routes.

Provides endpoints for:
- Login with email and password
- Fetching the current user
"""

from fastapi import APIRouter, Request

from notehub.config import settings
from notehub.core.auth.dependencies import Claim
from notehub.core.auth.service import AuthSvc
from notehub.core.rate_limit import rate_limit
from notehub.modules.tenants.models import Tenant
from notehub.modules.tenants.schemas import TenantRead
from notehub.modules.users.models import User
from notehub.modules.users.schemas import (
    LoginRequest,
    MeResponse,
    TokenResponse,
    UserResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


def _user_response(user: User, tenant: Tenant) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        tenant=TenantRead.model_validate(tenant),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="Authenticate with email and password to receive a bearer token.",
)
@rate_limit(
    requests=settings.login_rate_limit_requests,
    window=settings.login_rate_limit_window,
)
async def login(
    data: LoginRequest,
    service: AuthSvc,
    request: Request,  # noqa: ARG001
) -> TokenResponse:
    """Login with email and password."""
    user, tenant, token = await service.login(email=data.email, password=data.password)

    return TokenResponse(
        token=token,
        expires_in=settings.access_token_expire_minutes * 60,
        user=_user_response(user, tenant),
    )


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current user",
    description="Returns the currently authenticated user and their tenant.",
)
async def get_me(claim: Claim, service: AuthSvc) -> MeResponse:
    """Get current user profile."""
    user, tenant = await service.get_me(claim)
    return MeResponse(user=_user_response(user, tenant))
