"""Authentication schemas for token handling."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from notehub.core.constants import ACCESS_TOKEN_TYPE
from notehub.modules.users.models import UserRole


class SessionClaim(BaseModel):
    """Identity extracted from a verified session token.

    Derived per request and never stored server-side.

    Attributes:
        user_id: The user's identifier
        email: The user's email at issuance
        role: The user's role at issuance
        tenant_id: The tenant the user belongs to
        exp: Token expiration time
        type: Token type (always "access")
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: str
    role: UserRole
    tenant_id: str
    exp: datetime
    type: str = ACCESS_TOKEN_TYPE
