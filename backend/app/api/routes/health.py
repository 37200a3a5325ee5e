"""Health Probe — liveness endpoint, public (no token required).

Invariants:
    - GET /health and GET /api/health always return 200 if the process is up
    - Payload carries no user data
    - Uptime counts from app.state.started_at, stamped by create_app()
"""

import os
import platform
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
@router.get("/api/health", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = request.app.state.settings
    now = datetime.now(timezone.utc)
    uptime = now - request.app.state.started_at
    return {
        "status": "Healthy",
        "timestamp": now.isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
        "uptimeSeconds": round(uptime.total_seconds(), 1),
        "machineName": platform.node(),
        "osVersion": platform.platform(),
        "processorCount": os.cpu_count(),
    }
