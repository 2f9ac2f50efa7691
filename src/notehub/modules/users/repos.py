"""User repository (the credential store)."""

from typing import Annotated

from fastapi import Depends

from notehub.api.dependencies import Store
from notehub.modules.users.models import User


class UserRepository:
    """Repository for User records.

    Lookups by id can be scoped to a tenant. Lookup by email is
    system-level because the tenant is not known before login.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    async def get_by_id(self, user_id: str, tenant_id: str | None = None) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's identifier
            tenant_id: Optional tenant ID for scoping

        Returns:
            User if found, None otherwise
        """
        user = self.store.users.get(user_id)
        if user is None:
            return None
        if tenant_id is not None and user.tenant_id != tenant_id:
            return None
        return user

    async def get_by_email_system(self, email: str) -> User | None:
        """Get a user by email across all tenants.

        Only for the login flow. Matching ignores case and surrounding
        whitespace.

        Args:
            email: The email address

        Returns:
            User if found, None otherwise
        """
        needle = email.strip().lower()
        for user in self.store.users.values():
            if user.email.lower() == needle:
                return user
        return None


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
