"""Tenant API routes."""

from fastapi import APIRouter

from notehub.core.auth.dependencies import Claim
from notehub.core.permissions import Action, require_action
from notehub.modules.tenants.schemas import (
    TenantInfoResponse,
    TenantRead,
    UpgradeResponse,
)
from notehub.modules.tenants.services import TenantSvc


router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get(
    "/{slug}",
    response_model=TenantInfoResponse,
    summary="Get tenant",
    description="Returns the caller's tenant with its note count and plan limit.",
)
async def get_tenant(slug: str, claim: Claim, service: TenantSvc) -> TenantInfoResponse:
    """Get the caller's own tenant."""
    return await service.get_tenant_info(claim, slug)


@router.post(
    "/{slug}/upgrade",
    response_model=UpgradeResponse,
    summary="Upgrade to Pro",
    description="Admin only. Lifts the note limit for the caller's tenant.",
)
@require_action(Action.TENANT_UPGRADE)
async def upgrade_tenant(slug: str, claim: Claim, service: TenantSvc) -> UpgradeResponse:
    """Upgrade the caller's tenant subscription."""
    tenant = await service.upgrade(claim, slug)
    return UpgradeResponse(tenant=TenantRead.model_validate(tenant))
