# Hey future me - health endpoints for Docker/compose probes. Mounted WITHOUT the API prefix.
#
# Endpoints:
# - /health       → status + version + store check
# - /health/live  → liveness probe (process is up, no dependency checks)
#
# Docker HEALTHCHECK: curl -f http://localhost:8787/health/live || exit 1
"""Health check endpoints for container probes."""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field
from sqlalchemy import text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthStatus(BaseModel):
    """Overall health status response."""

    status: str = Field(description="healthy or degraded")
    version: str = Field(description="Application version")
    timestamp: str = Field(description="ISO timestamp of health check")
    uptime_seconds: float | None = Field(
        default=None, description="Seconds since app started"
    )
    checks: dict[str, Any] = Field(
        default_factory=dict, description="Individual component checks"
    )


class LivenessStatus(BaseModel):
    """Simple liveness probe response."""

    status: str = Field(description="alive")
    timestamp: str = Field(description="ISO timestamp")


@router.get("/live", response_model=LivenessStatus)
async def liveness_probe() -> LivenessStatus:
    """Liveness probe. Returns 200 while the process is running."""
    return LivenessStatus(
        status="alive",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("", response_model=HealthStatus)
async def health_check(request: Request) -> HealthStatus:
    """Health check with store connectivity and credential presence.

    Always 200. A broken store makes the status "degraded"; missing YouTube or
    Home Assistant credentials are only reported.
    """
    checks: dict[str, Any] = {}
    settings = request.app.state.settings

    db = getattr(request.app.state, "db", None)
    if db is None:
        checks["store"] = {"status": "error", "error": "Not initialized"}
    else:
        try:
            async with db.session_scope() as session:
                await session.execute(text("SELECT 1"))
            checks["store"] = {"status": "ok"}
        except Exception as e:
            logger.warning("Store health check failed: %s", e)
            checks["store"] = {"status": "error", "error": str(e)}

    checks["youtube"] = {"configured": settings.youtube.is_configured()}
    checks["home_assistant"] = {"configured": settings.home_assistant.is_configured()}

    uptime = None
    startup_time = getattr(request.app.state, "startup_time", None)
    if startup_time is not None:
        uptime = (datetime.now(UTC) - startup_time).total_seconds()

    return HealthStatus(
        status="healthy" if checks["store"]["status"] == "ok" else "degraded",
        version=settings.app_version,
        timestamp=datetime.now(UTC).isoformat(),
        uptime_seconds=uptime,
        checks=checks,
    )
