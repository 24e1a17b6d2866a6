# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# Accessors for the repositories the lifespan attaches to app.state.
# Pipeline handlers call them with ctx.request; plain FastAPI routes inject
# them with Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.repositories import ProductRepository, UserRepository
from core.services import AuthService, ProductService


def get_product_repository(request: Request) -> ProductRepository:
    """Product storage owned by the running application."""
    return request.app.state.products


def get_user_repository(request: Request) -> UserRepository:
    """Account storage owned by the running application."""
    return request.app.state.users


def get_product_service(request: Request) -> ProductService:
    return ProductService(get_product_repository(request))


def get_auth_service(request: Request) -> AuthService:
    return AuthService(get_user_repository(request))


# Type alias for dependency injection
ProductRepositoryDep = Annotated[ProductRepository, Depends(get_product_repository)]
