"""In-memory application state.

A single MemoryStore instance is created per application and shared
by every request. Repositories never keep their own state; they read
and write through the store so that isolation rules live in one place.
"""

import asyncio
from typing import TYPE_CHECKING

import structlog
from fastapi import Request


if TYPE_CHECKING:
    from notehub.modules.notes.models import Note
    from notehub.modules.tenants.models import Tenant
    from notehub.modules.users.models import User


logger = structlog.get_logger()


class MemoryStore:
    """Owns tenants, users and notes plus the locks guarding mutation.

    Mutations that must be atomic per tenant (the count-check-insert
    sequence of note creation, plan upgrades, note updates and deletes)
    run under `tenant_lock(tenant_id)`.
    """

    def __init__(self) -> None:
        self.tenants: dict[str, Tenant] = {}
        self.users: dict[str, User] = {}
        # Insertion ordered; list endpoints rely on it
        self.notes: dict[str, Note] = {}
        self._tenant_locks: dict[str, asyncio.Lock] = {}

    def tenant_lock(self, tenant_id: str) -> asyncio.Lock:
        """Return the mutation lock for a tenant, creating it on first use."""
        lock = self._tenant_locks.get(tenant_id)
        if lock is None:
            lock = self._tenant_locks.setdefault(tenant_id, asyncio.Lock())
        return lock

    def add_tenant(self, tenant: "Tenant") -> "Tenant":
        """Register a tenant at bootstrap.

        Raises:
            ValueError: If the id or slug is already taken
        """
        if tenant.id in self.tenants:
            raise ValueError(f"Tenant id already exists: {tenant.id}")
        if any(t.slug == tenant.slug for t in self.tenants.values()):
            raise ValueError(f"Tenant slug already exists: {tenant.slug}")
        self.tenants[tenant.id] = tenant
        return tenant

    def add_user(self, user: "User") -> "User":
        """Register a user at bootstrap.

        Raises:
            ValueError: If the email is taken or the tenant does not exist
        """
        if user.tenant_id not in self.tenants:
            raise ValueError(f"Unknown tenant for user {user.email}: {user.tenant_id}")
        email = user.email.lower()
        if any(u.email.lower() == email for u in self.users.values()):
            raise ValueError(f"User email already exists: {user.email}")
        self.users[user.id] = user
        return user

    def check_integrity(self) -> list[str]:
        """Return descriptions of any broken referential invariants."""
        problems = [
            f"note {note.id} references unknown tenant {note.tenant_id}"
            for note in self.notes.values()
            if note.tenant_id not in self.tenants
        ]
        problems.extend(
            f"user {user.id} references unknown tenant {user.tenant_id}"
            for user in self.users.values()
            if user.tenant_id not in self.tenants
        )
        return problems

    def clear(self) -> None:
        """Drop all state."""
        self.tenants.clear()
        self.users.clear()
        self.notes.clear()
        self._tenant_locks.clear()


def get_store(request: Request) -> MemoryStore:
    """FastAPI dependency returning the application's store."""
    return request.app.state.store
