"""Pipeline Dispatcher — builds the ordered middleware list once, at app construction.

Invariants:
    - Order: error handling → CORS → authentication → request logging → router
    - Starlette wraps the list first-to-last, so index 0 is the outermost stage
    - Pure composition: no state beyond the collaborators passed in

Design Decisions:
    - Request logging sits inside authentication: rejected requests get no
      "Incoming" line or timing, only the authentication warning
    - CORS before authentication: preflight OPTIONS never needs a token
"""

from collections.abc import Mapping

from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.pipeline.authenticate import make_authenticator
from app.api.pipeline.handle_errors import make_error_handler
from app.api.pipeline.log_requests import make_request_logger
from app.config import Settings
from app.core.credentials import TokenIdentity


def build_pipeline(
    settings: Settings, tokens: Mapping[str, TokenIdentity],
) -> list[Middleware]:
    """Return the middleware stack for FastAPI(middleware=...)."""
    return [
        Middleware(BaseHTTPMiddleware, dispatch=make_error_handler()),
        Middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        Middleware(
            BaseHTTPMiddleware,
            dispatch=make_authenticator(tokens, settings.public_paths),
        ),
        Middleware(
            BaseHTTPMiddleware,
            dispatch=make_request_logger(settings.slow_request_threshold_ms),
        ),
    ]
