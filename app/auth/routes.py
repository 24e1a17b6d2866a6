# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# POST /api/auth/register  - create an account, returns a token (201)
# POST /api/auth/login     - exchange credentials for a token
# GET  /api/auth/me        - the authenticated account's public profile
# =============================================================================

import logging

from fastapi import APIRouter, Request
from starlette.responses import Response

from app.dependencies import get_auth_service, get_user_repository
from app.exceptions import AuthenticationError, envelope_response
from app.pipeline import Pipeline, RequestContext, authenticate, sanitize, validate
from app.pipeline.rules import LOGIN_RULES, REGISTER_RULES

logger = logging.getLogger(__name__)

router = APIRouter()


register_pipeline = Pipeline(sanitize, validate(*REGISTER_RULES))
login_pipeline = Pipeline(sanitize, validate(*LOGIN_RULES))
me_pipeline = Pipeline(authenticate)


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/register", status_code=201)
async def register(request: Request) -> Response:
    """
    Register a new account.

    Body: {name, email, password, role?}. Returns the public account plus a
    bearer token.

    Raises:
        400: Validation failure or email already registered
    """
    return await register_pipeline.run(request, _register)


async def _register(context: RequestContext) -> Response:
    body = context.body
    result = get_auth_service(context.request).register(
        name=body["name"],
        email=body["email"],
        password=body["password"],
        role=body.get("role", "user"),
    )
    return envelope_response(201, "User registered successfully", data=result.to_json())


@router.post("/login")
async def login(request: Request) -> Response:
    """
    Log in with email and password.

    Raises:
        401: Invalid credentials or deactivated account
    """
    return await login_pipeline.run(request, _login)


async def _login(context: RequestContext) -> Response:
    result = get_auth_service(context.request).login(
        email=context.body["email"],
        password=context.body["password"],
    )
    return envelope_response(200, "Login successful", data=result.to_json())


@router.get("/me")
async def me(request: Request) -> Response:
    """
    Get the current authenticated account.

    Raises:
        401: If not authenticated
    """
    return await me_pipeline.run(request, _me)


async def _me(context: RequestContext) -> Response:
    user = get_user_repository(context.request).get_by_id(context.principal.id)
    if user is None:
        # Removed after the token was checked
        raise AuthenticationError("User not found", code="USER_NOT_FOUND")
    return envelope_response(200, "User fetched successfully", data=user.public().to_json())
