"""User domain model."""

from dataclasses import dataclass
from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = "admin"
    MEMBER = "member"


@dataclass(frozen=True)
class User:
    """A credential record belonging to exactly one tenant.

    Frozen: a user's tenant never changes after creation.
    """

    id: str
    email: str
    password_hash: str
    role: UserRole
    tenant_id: str
