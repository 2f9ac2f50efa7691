"""Authentication: password hashing, session tokens and login.

Routes and service live in their own submodules and are imported
directly, since they depend on the feature modules.
"""

from notehub.core.auth.backend import (
    create_access_token,
    decode_token,
    hash_password,
    verify_access_token,
    verify_password,
)
from notehub.core.auth.schemas import SessionClaim


__all__ = [
    "SessionClaim",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_access_token",
    "verify_password",
]
