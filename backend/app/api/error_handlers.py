"""Error Handlers — ErrorResponse builder and FastAPI exception handlers.

Invariants:
    - Every error body written by the service goes through error_response()
    - requestId comes from the RequestContext ("Unknown" before the logging stage ran)
    - X-Correlation-ID, when supplied, is echoed in the body and the response header
    - RequestValidationError → 400 with field-level details (never FastAPI's default 422)
    - Bodies never contain stack traces

Design Decisions:
    - Unhandled exceptions are NOT registered here: they propagate to the error
      handling stage, which owns the catch-all (see api/pipeline/handle_errors.py)
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import HTTPConnection

from app.core.request_context import RequestContext
from app.schemas.user import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def get_request_context(request: HTTPConnection) -> RequestContext:
    """Return the RequestContext for this request, creating it on first access."""
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext()
        request.state.context = context
    return context


def error_response(
    request: HTTPConnection,
    status_code: int,
    error: str,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    """Build the structured JSON error response."""
    correlation_id = request.headers.get(CORRELATION_HEADER)
    body = ErrorResponse(
        error=error,
        message=message,
        request_id=get_request_context(request).resolved_request_id,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        details=details,
    )
    response = JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
    if correlation_id is not None:
        response.headers[CORRELATION_HEADER] = correlation_id
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""
    _register_validation_error_handler(app)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            "Invalid request data",
            details=_build_validation_details(exc),
        )


def _build_validation_details(exc: RequestValidationError) -> list[ErrorDetail]:
    """Flatten pydantic errors into field/message/type triples."""
    return [
        ErrorDetail(
            field=".".join(str(loc) for loc in e["loc"]),
            message=e["msg"],
            type=e["type"],
        )
        for e in exc.errors()
    ]
