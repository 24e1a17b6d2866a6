# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides liveness and readiness endpoints for monitoring and load balancers.
# Neither requires authentication.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from starlette.responses import Response

from app.config import settings
from app.dependencies import ProductRepositoryDep
from app.exceptions import envelope_response

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/ping")
async def ping() -> Response:
    """
    Liveness check.

    Returns whether the service process is alive.
    """
    return envelope_response(200, "pong", data={"timestamp": _timestamp()})


@router.get("/health")
async def health_check(products: ProductRepositoryDep) -> Response:
    """
    Readiness check.

    Returns 200 when storage answers, 503 otherwise.
    """
    try:
        products.ping()
        database = "healthy"
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        database = f"unhealthy: {str(e)[:50]}"

    ready = database == "healthy"
    return envelope_response(
        200 if ready else 503,
        "Service is healthy" if ready else "Service is degraded",
        success=ready,
        data={
            "status": "ready" if ready else "degraded",
            "checks": {"database": database},
            "environment": settings.ENVIRONMENT,
            "version": API_VERSION,
            "timestamp": _timestamp(),
        },
    )
