"""Authentication backend for JWT and password handling.

This module provides core authentication utilities including:
- Password hashing with bcrypt
- Session token issuance and verification
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from notehub.config import settings
from notehub.core.auth.schemas import SessionClaim
from notehub.core.constants import (
    ACCESS_TOKEN_JTI_LENGTH,
    ACCESS_TOKEN_TYPE,
    BCRYPT_ROUNDS,
)
from notehub.core.errors import InvalidTokenError


if TYPE_CHECKING:
    from notehub.modules.users.models import User


# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# ============================================================
# JWT Token Utilities
# ============================================================


def create_access_token(
    user: "User",
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed session token for a user.

    Args:
        user: The authenticated user
        expires_delta: Optional custom lifetime (negative values
            produce an already-expired token)

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": user.id,
        "email": user.email,
        "role": str(user.role),
        "tenant_id": user.tenant_id,
        "exp": expire,
        "iat": now,
        "type": ACCESS_TOKEN_TYPE,
        "jti": secrets.token_urlsafe(ACCESS_TOKEN_JTI_LENGTH),  # Unique token ID
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> SessionClaim | None:
    """Decode and validate a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        SessionClaim if valid, None if invalid, malformed or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )

        user_id = payload.get("sub")
        tenant_id = payload.get("tenant_id")
        exp = payload.get("exp")

        if not user_id or not tenant_id or exp is None:
            return None

        return SessionClaim(
            user_id=user_id,
            email=payload.get("email", ""),
            role=payload.get("role"),
            tenant_id=tenant_id,
            exp=datetime.fromtimestamp(exp, tz=UTC),
            type=payload.get("type", ACCESS_TOKEN_TYPE),
        )

    except (JWTError, PydanticValidationError, TypeError, ValueError):
        return None


def verify_access_token(token: str) -> SessionClaim:
    """Verify a bearer token and return its claim.

    Args:
        token: The raw bearer token

    Returns:
        The verified session claim

    Raises:
        InvalidTokenError: If the token is invalid, expired or not an access token
    """
    claim = decode_token(token)
    if claim is None:
        raise InvalidTokenError()

    if claim.type != ACCESS_TOKEN_TYPE:
        raise InvalidTokenError("Invalid token type")

    return claim
