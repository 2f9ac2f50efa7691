"""Tenant repository."""

from typing import Annotated

import structlog
from fastapi import Depends

from notehub.api.dependencies import Store
from notehub.modules.tenants.models import Tenant, TenantPlan


logger = structlog.get_logger()


class TenantRepository:
    """Repository for Tenant records."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def get_by_id(self, tenant_id: str) -> Tenant | None:
        """Get a tenant by ID."""
        return self.store.tenants.get(tenant_id)

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Get a tenant by its slug.

        Args:
            slug: URL-safe tenant identifier

        Returns:
            Tenant if found, None otherwise
        """
        for tenant in self.store.tenants.values():
            if tenant.slug == slug:
                return tenant
        return None

    async def upgrade_plan(self, tenant_id: str) -> Tenant:
        """Move a tenant to the PRO plan.

        Runs under the tenant's lock so it serializes with note
        creation. Upgrading a tenant already on PRO is a no-op.

        Args:
            tenant_id: The tenant to upgrade

        Returns:
            The upgraded tenant

        Raises:
            KeyError: If the tenant does not exist
        """
        async with self.store.tenant_lock(tenant_id):
            tenant = self.store.tenants[tenant_id]
            previous = tenant.plan
            tenant.plan = TenantPlan.PRO

        logger.info(
            "tenant_upgraded",
            tenant_id=tenant_id,
            previous_plan=str(previous),
            plan=str(tenant.plan),
        )
        return tenant


# Type alias for dependency injection
TenantRepo = Annotated[TenantRepository, Depends(TenantRepository)]
