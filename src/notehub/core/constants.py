"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_PASSWORD_LENGTH = 128

# Password hashing
BCRYPT_ROUNDS = 12

# Token settings
ACCESS_TOKEN_JTI_LENGTH = 32
ACCESS_TOKEN_TYPE = "access"
DEFAULT_TOKEN_EXPIRE_MINUTES = 24 * 60

# Subscription plans
DEFAULT_FREE_PLAN_NOTE_LIMIT = 3
QUOTA_ERROR_CODE = "SUBSCRIPTION_LIMIT_REACHED"

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
