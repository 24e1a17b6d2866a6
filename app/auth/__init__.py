# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides bearer-token authentication for the API.
#
# - models.py: Principal (authenticated identity), TokenPayload
# - security.py: Password hashing and access token issue/verification
# - routes.py: /api/auth/register, /api/auth/login, /api/auth/me
#
# Usage:
#   from app.auth import Principal, create_access_token
# =============================================================================

from app.auth.models import Principal, TokenPayload
from app.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    "Principal",
    "TokenPayload",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
