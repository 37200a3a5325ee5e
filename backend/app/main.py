"""User Management API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Middleware stack built once by build_pipeline(): errors → CORS → auth → logging
    - Repository and token table are owned values injected via create_app(),
      exposed to routes through app.state — never module-level mutable state
    - RequestValidationError → 400; every other unhandled exception is translated
      by the error handling stage

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - Repository built in create_app, not in lifespan: tests drive the app through
      ASGITransport, which does not run lifespan events
"""

import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.pipeline.compose_pipeline import build_pipeline
from app.api.routes import health, service_info, users
from app.config import Settings, get_settings
from app.core.credentials import DEFAULT_TOKENS, TokenIdentity
from app.core.repository_protocols import UserRepository
from app.infrastructure.observability import setup_logging
from app.infrastructure.user_repository import build_user_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"Environment: {settings.environment}")
    logger.info("API Documentation available at: /swagger")
    logger.info("Health checks available at: /health")
    yield
    logger.info(f"{settings.app_name} shutting down")


def create_app(
    settings: Settings | None = None,
    repository: UserRepository | None = None,
    tokens: Mapping[str, TokenIdentity] | None = None,
) -> FastAPI:
    """Build the FastAPI app with its pipeline, routes and collaborators."""
    settings = settings or get_settings()
    if repository is None:
        repository = build_user_repository(
            settings.repository_latency_ms, settings.seed_users,
        )
    tokens = DEFAULT_TOKENS if tokens is None else tokens

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        middleware=build_pipeline(settings, tokens),
        docs_url="/swagger",
        redoc_url="/api/docs",
        openapi_url="/openapi/v1.json",
    )
    app.state.settings = settings
    app.state.user_repository = repository
    app.state.tokens = tokens
    app.state.started_at = datetime.now(timezone.utc)

    register_error_handlers(app)

    # Routes: explicit registration
    app.include_router(service_info.router)
    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()
