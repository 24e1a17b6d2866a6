# =============================================================================
# app/auth/security.py - Password Hashing and Access Tokens
# =============================================================================
# - Passwords are stored as salted PBKDF2-SHA256 hashes (passlib).
# - Access tokens are HS256 JWTs (python-jose) with claims:
#     sub  - account id (string)
#     role - account role at issue time
#     iat  - issued at
#     exp  - expiry (ACCESS_TOKEN_EXPIRE_MINUTES, default 7 days)
#
# There is no refresh flow; an expired token means logging in again.
# =============================================================================

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings
from lib.utils import utc_now

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Salted one-way hash of a plain-text password."""
    return pwd_context.hash(password)


def verify_password(plain: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored hash."""
    try:
        return pwd_context.verify(plain, password_hash)
    except ValueError:
        # Stored value is not a hash this context understands
        return False


def create_access_token(
    subject: int | str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue a signed access token for an account.

    Args:
        subject: Account id
        role: Account role
        expires_delta: Lifetime override (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT string
    """
    issued_at = utc_now()
    expire = issued_at + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {
        "sub": str(subject),
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        ExpiredSignatureError: token is past its exp claim
        JWTError: bad signature, malformed token or missing subject
    """
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    if not payload.get("sub"):
        raise JWTError("Token is missing the subject claim")
    return payload
