"""Health & Readiness Probes.

Invariants:
    - GET /api/v1/health always returns 200 if the process is up
    - GET /api/v1/health/ready returns 503 if the database is unreachable
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from portfolio.config import get_settings
import portfolio.infrastructure.database as database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

_started_at = time.monotonic()


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness probe with process uptime and environment name."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "environment": get_settings().environment,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    if manager is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_not_initialized"},
        )
    health = await manager.health_check()
    if not health.ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "error": health.error,
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "database_latency_ms": health.latency_ms},
    }
