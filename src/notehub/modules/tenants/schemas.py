"""Pydantic schemas for tenant operations."""

from pydantic import Field

from notehub.core.schemas import APIModel
from notehub.modules.tenants.models import TenantPlan


class TenantRead(APIModel):
    """Schema for tenant response data."""

    id: str
    name: str
    slug: str
    plan: TenantPlan


class TenantInfoResponse(TenantRead):
    """Tenant with its current note usage."""

    note_count: int
    note_limit: int | None = Field(
        default=None, description="Maximum notes for the plan; null when unlimited"
    )


class UpgradeResponse(APIModel):
    """Schema for a successful plan upgrade."""

    message: str = "Subscription upgraded to Pro"
    tenant: TenantRead
