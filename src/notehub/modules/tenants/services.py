"""Tenant service for plan and usage operations."""

from typing import Annotated, cast

from fastapi import Depends

from notehub.core.auth.schemas import SessionClaim
from notehub.core.permissions import Action, authorize, note_limit
from notehub.modules.notes.repos import NoteRepo
from notehub.modules.tenants.models import Tenant
from notehub.modules.tenants.repos import TenantRepo
from notehub.modules.tenants.schemas import TenantInfoResponse


class TenantService:
    """Service for tenant operations addressed by slug.

    An unknown slug is refused exactly like another tenant's slug, so
    callers cannot enumerate which tenants exist.
    """

    def __init__(self, repo: TenantRepo, notes: NoteRepo) -> None:
        self.repo = repo
        self.notes = notes

    async def _resolve(self, claim: SessionClaim, action: Action, slug: str) -> Tenant:
        tenant = await self.repo.get_by_slug(slug)
        authorize(claim, action, tenant.id if tenant else None)
        # authorize only passes when the slug names the caller's own tenant
        return cast("Tenant", tenant)

    async def get_tenant_info(self, claim: SessionClaim, slug: str) -> TenantInfoResponse:
        """Get the caller's tenant with its note usage.

        Args:
            claim: The caller's verified claim
            slug: Tenant slug from the path

        Returns:
            Tenant details plus note count and plan limit

        Raises:
            ForbiddenError: If the slug is unknown or names another tenant
        """
        tenant = await self._resolve(claim, Action.TENANT_READ, slug)
        count = await self.notes.count(tenant.id)

        return TenantInfoResponse(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            plan=tenant.plan,
            note_count=count,
            note_limit=note_limit(tenant.plan),
        )

    async def upgrade(self, claim: SessionClaim, slug: str) -> Tenant:
        """Move the caller's tenant to the PRO plan.

        Takes effect for the very next note creation. Upgrading a
        tenant that is already on PRO succeeds without change.

        Raises:
            ForbiddenError: If the caller is not an admin, or the slug
                is unknown or names another tenant
        """
        tenant = await self._resolve(claim, Action.TENANT_UPGRADE, slug)
        return await self.repo.upgrade_plan(tenant.id)


# Type alias for dependency injection
TenantSvc = Annotated[TenantService, Depends(TenantService)]
