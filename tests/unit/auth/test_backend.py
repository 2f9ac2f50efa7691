"""Unit tests for auth backend (JWT and password handling)."""

from datetime import timedelta

import pytest
from jose import jwt

from notehub.config import settings
from notehub.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_access_token,
    verify_password,
)
from notehub.core.errors import InvalidTokenError
from notehub.modules.users.models import UserRole
from tests.factories import UserFactory


pytestmark = pytest.mark.unit


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password_returns_hash(self):
        """hash_password should return a bcrypt hash."""
        password = "mysecretpassword"
        hashed = hash_password(password)

        assert hashed != password
        assert hashed.startswith("$2b$")  # bcrypt prefix

    def test_verify_password_correct(self):
        """verify_password should return True for correct password."""
        hashed = hash_password("mysecretpassword")

        assert verify_password("mysecretpassword", hashed) is True

    def test_verify_password_incorrect(self):
        """verify_password should return False for incorrect password."""
        hashed = hash_password("mysecretpassword")

        assert verify_password("wrongpassword", hashed) is False


class TestJWTTokens:
    """Tests for session token functions."""

    def test_create_access_token_returns_jwt(self):
        """create_access_token should return a three-part JWT string."""
        token = create_access_token(UserFactory.build())

        assert isinstance(token, str)
        assert token.count(".") == 2

    def test_decode_token_carries_identity(self):
        """decode_token should return the user's id, role and tenant."""
        user = UserFactory.build(role=UserRole.ADMIN)

        claim = decode_token(create_access_token(user))

        assert claim is not None
        assert claim.user_id == user.id
        assert claim.email == user.email
        assert claim.role is UserRole.ADMIN
        assert claim.tenant_id == user.tenant_id
        assert claim.type == "access"

    def test_default_lifetime_is_from_settings(self):
        """Tokens expire after the configured number of minutes."""
        token = create_access_token(UserFactory.build())
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])

        assert payload["exp"] - payload["iat"] == settings.access_token_expire_minutes * 60

    def test_tokens_are_unique(self):
        """Two tokens for the same user differ by their jti."""
        user = UserFactory.build()

        assert create_access_token(user) != create_access_token(user)

    def test_decode_token_invalid(self):
        """decode_token should return None for a malformed token."""
        assert decode_token("invalid.token.here") is None

    def test_decode_token_expired(self):
        """decode_token should return None for an expired token."""
        token = create_access_token(UserFactory.build(), expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None

    def test_decode_token_wrong_signature(self):
        """Tokens signed with another key are rejected."""
        payload = jwt.get_unverified_claims(create_access_token(UserFactory.build()))
        forged = jwt.encode(payload, "x" * 40, algorithm="HS256")

        assert decode_token(forged) is None

    def test_decode_token_missing_tenant(self):
        """Tokens without a tenant claim are rejected."""
        payload = jwt.get_unverified_claims(create_access_token(UserFactory.build()))
        del payload["tenant_id"]
        token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)

        assert decode_token(token) is None

    def test_decode_token_unknown_role(self):
        """Tokens with a role outside the known set are rejected."""
        payload = jwt.get_unverified_claims(create_access_token(UserFactory.build()))
        payload["role"] = "owner"
        token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)

        assert decode_token(token) is None


class TestVerifyAccessToken:
    """Tests for verify_access_token."""

    def test_valid_token(self):
        user = UserFactory.build()

        assert verify_access_token(create_access_token(user)).user_id == user.id

    def test_expired_token_raises(self):
        token = create_access_token(UserFactory.build(), expires_delta=timedelta(seconds=-1))

        with pytest.raises(InvalidTokenError) as exc_info:
            verify_access_token(token)

        assert exc_info.value.error_code == "invalid_token"
        assert exc_info.value.status_code == 401

    def test_wrong_token_type_raises(self):
        payload = jwt.get_unverified_claims(create_access_token(UserFactory.build()))
        payload["type"] = "refresh"
        token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)

        with pytest.raises(InvalidTokenError, match="Invalid token type"):
            verify_access_token(token)
