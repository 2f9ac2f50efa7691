"""Authentication service for login and session lookup."""

from typing import Annotated

import structlog
from fastapi import Depends

from notehub.core.auth.backend import create_access_token, pwd_context, verify_password
from notehub.core.auth.schemas import SessionClaim
from notehub.core.constants import MAX_EMAIL_LENGTH, MAX_PASSWORD_LENGTH
from notehub.core.errors import NotFoundError, UnauthorizedError
from notehub.modules.tenants.models import Tenant
from notehub.modules.tenants.repos import TenantRepo
from notehub.modules.users.models import User
from notehub.modules.users.repos import UserRepo


logger = structlog.get_logger()


def _credential_present(value: str | None, max_length: int) -> bool:
    """True for a non-blank value no longer than `max_length`."""
    return value is not None and bool(value.strip()) and len(value) <= max_length


class AuthService:
    """Service for authentication operations.

    Handles login against the credential store and resolution of the
    current session's user.
    """

    def __init__(self, users: UserRepo, tenants: TenantRepo) -> None:
        self.user_repo = users
        self.tenant_repo = tenants

    async def _tenant_of(self, user: User) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(user.tenant_id)
        if tenant is None:
            raise NotFoundError(
                "Tenant not found", resource="tenant", resource_id=user.tenant_id
            )
        return tenant

    async def login(
        self, email: str | None, password: str | None
    ) -> tuple[User, Tenant, str]:
        """Authenticate a user with email and password.

        Missing or blank credentials, unknown email and wrong password all
        fail with the same error, and each costs one bcrypt verification.

        Args:
            email: User's email address (case-insensitive), None if absent
            password: Plain text password, None if absent

        Returns:
            Tuple of (user, tenant, access_token)

        Raises:
            UnauthorizedError: If credentials are invalid
        """
        if not _credential_present(email, MAX_EMAIL_LENGTH) or not _credential_present(
            password, MAX_PASSWORD_LENGTH
        ):
            pwd_context.dummy_verify()
            logger.info("login_failed", reason="missing_credentials")
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        # System-level lookup: tenant not known during login
        user = await self.user_repo.get_by_email_system(email)
        if user is None:
            pwd_context.dummy_verify()
            logger.info("login_failed", reason="unknown_email")
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        if not verify_password(password, user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        tenant = await self._tenant_of(user)
        token = create_access_token(user)

        logger.info("login_succeeded", user_id=user.id, tenant_id=tenant.id)
        return user, tenant, token

    async def get_me(self, claim: SessionClaim) -> tuple[User, Tenant]:
        """Resolve the user and tenant behind a session claim.

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = await self.user_repo.get_by_id(claim.user_id, claim.tenant_id)
        if user is None:
            raise NotFoundError("User not found", resource="user", resource_id=claim.user_id)
        return user, await self._tenant_of(user)


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
