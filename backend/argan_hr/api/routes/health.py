"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready reports healthy | degraded | unhealthy; unhealthy returns 503
    - degraded (configuration warnings only) still returns 200: the app can serve traffic

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from argan_hr.config import get_settings
import argan_hr.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

_DEFAULT_SECRET = "change-me-in-production"


def configuration_warnings() -> list[str]:
    settings = get_settings()
    warnings = []
    if settings.session_secret == _DEFAULT_SECRET:
        warnings.append("session_secret uses the development default")
    if settings.environment == "production" and not settings.session_https_only:
        warnings.append("session cookie is not https-only in production")
    return warnings


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "argan-hr-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: database connectivity plus configuration sanity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    warnings = configuration_warnings()
    checks = {
        "database": "healthy" if db_ok else "unhealthy",
        "configuration": "warning" if warnings else "healthy",
    }
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "checks": checks, "warnings": warnings},
        )
    overall = "degraded" if warnings else "healthy"
    if warnings:
        logger.warning(f"Readiness degraded: {'; '.join(warnings)}")
    return {"status": overall, "checks": checks, "warnings": warnings}
