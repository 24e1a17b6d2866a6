# =============================================================================
# core/services/auth_service.py - Account Registration and Login
# =============================================================================
# Registration stores a salted password hash and returns a bearer token.
# Login checks the password before the active flag, so a wrong password on
# a deactivated account is reported as plain invalid credentials.
# =============================================================================

import logging

from app.auth.security import create_access_token, hash_password, verify_password
from app.exceptions import AccountDeactivatedError, DuplicateEmailError, InvalidCredentialsError
from core.models import AuthResult, Role, User
from core.repositories import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account operations."""

    def __init__(self, users: UserRepository):
        self.users = users

    @staticmethod
    def _auth_result(user: User) -> AuthResult:
        token = create_access_token(user.id, user.role.value)
        return AuthResult(**user.public().model_dump(), token=token)

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: Role | str = Role.USER,
    ) -> AuthResult:
        """
        Create an account and issue its first token.

        Raises:
            DuplicateEmailError: If the email already has an account
            UniqueViolationError: If a concurrent registration won the race
        """
        email = email.lower()
        if self.users.get_by_email(email):
            raise DuplicateEmailError(email)

        user = self.users.create(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role(role),
        )
        logger.info(f"Registered account: {user.id} ({user.role.value})")
        return self._auth_result(user)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Verify credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountDeactivatedError: Correct password on an inactive account
        """
        user = self.users.get_by_email(email.lower())
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.warning(f"Login attempt on deactivated account: {user.id}")
            raise AccountDeactivatedError()

        return self._auth_result(user)

    def ensure_account(
        self,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> User:
        """Return the account for email, creating it if missing."""
        existing = self.users.get_by_email(email.lower())
        if existing:
            return existing
        return self.users.create(
            name=name,
            email=email.lower(),
            password_hash=hash_password(password),
            role=role,
        )
