"""Authentication Stage — public-path bypass, token extraction and validation.

Invariants:
    - Public paths skip straight to the next stage
    - Missing or unknown credential → 401 written here; call_next is never invoked
    - Rejections are normal outcomes: written directly, never raised to the error stage
    - Only credential resolution is guarded; failures from call_next propagate untouched
    - On success the identity is bound to RequestContext before call_next
"""

import logging
from collections.abc import Iterable, Mapping

from fastapi import status
from starlette.middleware.base import DispatchFunction, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.api.error_handlers import error_response, get_request_context
from app.core.credentials import (
    TokenIdentity, extract_token, is_public_path, resolve_identity,
)

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "Authentication token is required"
TOKEN_INVALID = "Invalid authentication token"
AUTH_FAILED = "Authentication error occurred"


def make_authenticator(
    tokens: Mapping[str, TokenIdentity], public_paths: Iterable[str],
) -> DispatchFunction:
    """Build the authentication stage over a fixed token table."""
    public_paths = tuple(public_paths)

    async def authenticate(
        request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        context = get_request_context(request)
        request_id = context.resolved_request_id
        path = request.url.path.lower()

        if is_public_path(path, public_paths):
            logger.debug(
                f"[{request_id}] Skipping authentication for public endpoint: {path}",
            )
            return await call_next(request)

        try:
            token = extract_token(request.headers, request.query_params)
            identity = resolve_identity(token, tokens) if token else None
        except Exception:
            logger.error(
                f"[{request_id}] Error during authentication for {path}",
                exc_info=True,
            )
            return _unauthorized(request, AUTH_FAILED)

        if token is None:
            logger.warning(
                f"[{request_id}] No authentication token provided for {path}",
            )
            return _unauthorized(request, TOKEN_REQUIRED)
        if identity is None:
            logger.warning(
                f"[{request_id}] Invalid authentication token provided for {path}",
            )
            return _unauthorized(request, TOKEN_INVALID)

        context.bind_identity(identity)
        logger.debug(
            f"[{request_id}] Authentication successful for {path}",
            extra={"user_id": context.user_id, "user_role": context.user_role},
        )
        return await call_next(request)

    return authenticate


def _unauthorized(request: Request, message: str) -> Response:
    return error_response(
        request, status.HTTP_401_UNAUTHORIZED, "Unauthorized", message,
    )
