# =============================================================================
# core/models/user.py - Account Schemas
# =============================================================================
# - Role: the two roles known to the authorizer
# - User: a stored account (includes the password hash, never returned)
# - UserPublic: what clients see of an account
# - AuthResult: payload returned by register/login (public fields + token)
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import Field

from .product import CamelModel


class Role(str, Enum):
    """Account roles. Admins may additionally delete products."""
    USER = "user"
    ADMIN = "admin"


class UserPublic(CamelModel):
    """Public view of an account."""

    id: int
    name: str
    email: str
    role: Role


class User(UserPublic):
    """
    A stored account.

    The password is only ever held as a salted one-way hash.
    """

    password_hash: str = Field(..., repr=False)
    is_active: bool = Field(default=True, description="Inactive accounts cannot authenticate")
    created_at: datetime | None = None

    def public(self) -> UserPublic:
        return UserPublic(id=self.id, name=self.name, email=self.email, role=self.role)


class AuthResult(UserPublic):
    """Register/login response data: the public account plus a bearer token."""

    token: str
