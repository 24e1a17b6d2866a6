# =============================================================================
# app/pipeline/auth.py - Authenticator and Authorizer Stages
# =============================================================================
# authenticate:
#   1. Reads "Authorization: Bearer <token>"
#   2. Verifies signature and expiry
#   3. Loads the account and rejects missing or deactivated ones
#   4. Attaches Principal(id, role) to the context
#
# require_roles(*roles):
#   Halts with 403 unless the attached principal has one of the roles.
# =============================================================================

import logging

from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError

from app.auth.models import Principal, TokenPayload
from app.auth.security import decode_access_token
from app.dependencies import get_user_repository
from app.exceptions import AuthorizationError, envelope_response
from core.models import Role

from .context import CONTINUE, Halt, RequestContext, Stage, StageResult

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _unauthorized(message: str) -> Halt:
    response = envelope_response(401, message)
    response.headers["WWW-Authenticate"] = "Bearer"
    return Halt(response)


def bearer_token(context: RequestContext) -> str | None:
    """Extract the bearer token from the Authorization header, if any."""
    header = context.request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):].strip() or None


async def authenticate(context: RequestContext) -> StageResult:
    token = bearer_token(context)
    if token is None:
        return _unauthorized("Not authenticated")

    try:
        claims = TokenPayload.model_validate(decode_access_token(token))
        user_id = int(claims.sub)
    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        return _unauthorized("Token expired")
    except (JWTError, ValidationError, ValueError) as e:
        logger.warning(f"Access token rejected: {e}")
        return _unauthorized("Invalid token")

    user = get_user_repository(context.request).get_by_id(user_id)
    if user is None:
        logger.warning(f"Token for unknown account: {user_id}")
        return _unauthorized("User not found")
    if not user.is_active:
        logger.warning(f"Token for deactivated account: {user_id}")
        return _unauthorized("Account is deactivated")

    context.principal = Principal(id=user.id, role=user.role)
    return CONTINUE


def require_roles(*roles: Role) -> Stage:
    """Build a stage allowing only principals with one of roles."""
    allowed = frozenset(roles)

    async def authorize(context: RequestContext) -> StageResult:
        principal = context.principal
        if principal is None:
            return _unauthorized("Not authenticated")
        if principal.role not in allowed:
            denied = AuthorizationError([role.value for role in roles])
            logger.warning(f"Account {principal.id} ({principal.role.value}) denied: {denied.message}")
            return Halt(envelope_response(denied.status_code, denied.message))
        return CONTINUE

    return authorize
