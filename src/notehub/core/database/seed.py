"""Bootstrap data for development and demos.

Creates two free-plan tenants with one admin and two members each.
Every account uses the password "password".
"""

from functools import lru_cache
from uuid import uuid4

import structlog

from notehub.core.auth.backend import hash_password
from notehub.core.database.store import MemoryStore
from notehub.modules.tenants.models import Tenant, TenantPlan
from notehub.modules.users.models import User, UserRole


logger = structlog.get_logger()

DEMO_PASSWORD = "password"

DEMO_TENANTS: list[dict[str, str]] = [
    {"name": "Acme Corp", "slug": "acme"},
    {"name": "Globex Inc", "slug": "globex"},
]

# (email local part, role) created for every demo tenant
DEMO_ACCOUNTS: list[tuple[str, UserRole]] = [
    ("admin", UserRole.ADMIN),
    ("user", UserRole.MEMBER),
    ("user2", UserRole.MEMBER),
]


@lru_cache(maxsize=1)
def _demo_password_hash() -> str:
    # bcrypt is slow on purpose; one salted hash serves every demo account
    return hash_password(DEMO_PASSWORD)


def seed_demo_data(store: MemoryStore) -> None:
    """Populate an empty store with the demo tenants and users."""
    if store.tenants:
        logger.info("seed_skipped", reason="store_not_empty")
        return

    password_hash = _demo_password_hash()

    for data in DEMO_TENANTS:
        tenant = store.add_tenant(
            Tenant(
                id=str(uuid4()),
                name=data["name"],
                slug=data["slug"],
                plan=TenantPlan.FREE,
            )
        )
        for local_part, role in DEMO_ACCOUNTS:
            store.add_user(
                User(
                    id=str(uuid4()),
                    email=f"{local_part}@{tenant.slug}.test",
                    password_hash=password_hash,
                    role=role,
                    tenant_id=tenant.id,
                )
            )

    logger.info(
        "seed_completed",
        tenants=len(store.tenants),
        users=len(store.users),
    )
