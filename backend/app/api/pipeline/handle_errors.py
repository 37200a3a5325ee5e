"""Error Handling Stage — outermost failure boundary of the pipeline.

Invariants:
    - Any exception escaping the inner chain becomes an ErrorResponse via map_exception()
    - requestId resolved from RequestContext ("Unknown" if the logging stage never ran)
    - Unmapped (internal) failures additionally log the full traceback
    - X-Correlation-ID echoed on every forwarded response, and in error bodies
    - Never raises: if building the error response fails, a fixed 500 body is written
"""

import logging

from starlette.middleware.base import DispatchFunction, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.api.error_handlers import (
    CORRELATION_HEADER, error_response, get_request_context,
)
from app.core.errors import map_exception

logger = logging.getLogger(__name__)

_FALLBACK_BODY = b'{"error":"Internal server error"}'


def make_error_handler() -> DispatchFunction:
    """Build the error handling stage."""

    async def handle_errors(
        request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        # Created here so inner stages share the same context object
        get_request_context(request)
        try:
            response = await call_next(request)
        except Exception as exc:
            return _translate_exception(request, exc)
        correlation_id = request.headers.get(CORRELATION_HEADER)
        if correlation_id is not None and CORRELATION_HEADER not in response.headers:
            response.headers[CORRELATION_HEADER] = correlation_id
        return response

    return handle_errors


def _translate_exception(request: Request, exc: Exception) -> Response:
    try:
        request_id = get_request_context(request).resolved_request_id
        mapping = map_exception(exc)
        logger.error(
            f"[{request_id}] An unhandled exception occurred: "
            f"{type(exc).__name__} - {exc}",
            extra={
                "request_id": request_id,
                "error_code": mapping.category.value,
                "path": request.url.path,
            },
        )
        if mapping.is_internal:
            logger.error(
                f"[{request_id}] Internal server error details",
                exc_info=exc,
                extra={"request_id": request_id},
            )
        return error_response(
            request, mapping.status_code, mapping.error, mapping.message,
        )
    except Exception:
        logger.critical("Failed to build error response", exc_info=True)
        return Response(
            content=_FALLBACK_BODY, status_code=500,
            media_type="application/json",
        )
