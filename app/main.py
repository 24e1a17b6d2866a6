# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the ProdManager API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.exceptions import install_exception_handlers
from app.routers import health, products
from app.auth import routes as auth_routes
from core.repositories import build_repositories
from core.seed import seed_admin_account, seed_demo_products

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect storage, verify it answers, seed demo data and the
      admin account. Any failure here aborts startup.
    - Shutdown: Release the repositories.
    """
    # Startup
    logger.info(f"Starting ProdManager API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    product_repository, user_repository = build_repositories(settings)
    try:
        product_repository.ping()
    except Exception as e:
        logger.error(f"Storage connection failed: {e}")
        raise
    logger.info(f"Storage connected ({settings.STORAGE_BACKEND})")

    if settings.SEED_DEMO_DATA:
        seed_demo_products(product_repository)

    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        seed_admin_account(
            user_repository,
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
        )

    app.state.products = product_repository
    app.state.users = user_repository

    yield

    # Shutdown
    logger.info("Shutting down ProdManager API")
    product_repository.close()
    user_repository.close()


# Create FastAPI application
app = FastAPI(
    title="ProdManager API",
    description="""
## Product Management API

Catalog management with account registration and bearer-token authentication.

### Request Pipeline

Every route runs the same ordered stages before its handler:

| Stage | Failure |
|-------|---------|
| **Sanitize** | never fails (trims and HTML-escapes strings) |
| **Validate** | 400 with per-field errors |
| **Authenticate** | 401 (missing, invalid or expired token) |
| **Authorize** | 403 (role not allowed) |

### Envelope

Every response body has the shape
`{"success": bool, "message": str, "data"?: ..., "errors"?: [...]}`.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:5000/api/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Ann Lee", "email": "ann@x.com", "password": "Abcdef1"}'

# 2. Create a product with the returned token
curl -X POST http://localhost:5000/api/products \\
  -H "Authorization: Bearer <token>" -H "Content-Type: application/json" \\
  -d '{"title": "Mouse", "description": "Wireless mouse", "price": 19.99, "image": "https://x.com/m.jpg"}'
```
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Registration, login and the current account",
        },
        {
            "name": "Products",
            "description": "Product catalog CRUD",
        },
        {
            "name": "Health",
            "description": "API liveness and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

install_exception_handlers(app)


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Product catalog endpoints
app.include_router(
    products.router,
    prefix="/api/products",
    tags=["Products"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "ProdManager API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }
