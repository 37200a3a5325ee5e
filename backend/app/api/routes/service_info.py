"""Service Info — public root endpoint describing the API."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["info"])


@router.get("/")
async def get_api_info(request: Request):
    """Name, version, links and the accepted authentication methods."""
    settings = request.app.state.settings
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": (
            "A comprehensive API for managing users with CRUD operations, "
            "authentication, and logging"
        ),
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "documentation": "/swagger",
        "healthCheck": "/health",
        "endpoints": {"users": "/api/users", "health": "/api/health"},
        "authentication": {
            "note": (
                "API requires authentication for all endpoints except "
                "health checks and documentation"
            ),
            "methods": ["Bearer token", "X-API-Key header", "token query parameter"],
            "validTokens": sorted(request.app.state.tokens),
        },
    }
