# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict

from core.models import Role


class Principal(BaseModel):
    """
    Authenticated identity attached to a request.

    Built from a verified token plus a fresh account lookup, so the role is
    the account's current role rather than the one at token issue time.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class TokenPayload(BaseModel):
    """Decoded access token claims."""

    sub: str  # Account ID
    role: str | None = None
    iat: int | None = None
    exp: int  # Expiration timestamp
