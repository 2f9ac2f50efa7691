"""Pydantic schemas for user and login operations."""

from pydantic import Field

from notehub.core.schemas import APIModel
from notehub.modules.tenants.schemas import TenantRead
from notehub.modules.users.models import UserRole


# ============================================================
# User Schemas
# ============================================================


class UserResponse(APIModel):
    """Schema for user response data.

    The tenant is embedded so clients can show the plan without a
    second request.
    """

    id: str
    email: str
    role: UserRole
    tenant: TenantRead


class MeResponse(APIModel):
    """Schema for the current-user endpoint."""

    user: UserResponse


# ============================================================
# Authentication Schemas
# ============================================================


class LoginRequest(APIModel):
    """Schema for email/password login.

    Email is a plain string: demo accounts live on the reserved
    `.test` domain, which strict email validators refuse. Both fields
    are optional here; missing or blank credentials are refused by the
    auth service with the same 401 as wrong ones.
    """

    email: str | None = None
    password: str | None = None


class TokenResponse(APIModel):
    """Schema for a successful login."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiration in seconds")
    user: UserResponse
