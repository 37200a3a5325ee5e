"""Request Logging Stage — request id assignment, timing, before/after log lines.

Invariants:
    - Generates an 8-hex-char request id and binds it once to RequestContext
    - current_request_id is set for the inner chain and reset on exit
    - Completion line always logged (success, rejection, or exception)
    - Slow requests (elapsed > threshold) additionally logged at WARNING
    - Exceptions are logged and re-raised unchanged; the completion line reports
      the status map_exception() assigns, which the error stage then writes
"""

import logging
import time
import uuid

from starlette.middleware.base import DispatchFunction, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.api.error_handlers import get_request_context
from app.core.errors import map_exception
from app.core.request_context import current_request_id

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = frozenset({
    "authorization", "cookie", "x-api-key", "x-auth-token", "authentication",
})


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def safe_headers(request: Request) -> dict[str, str]:
    """Request headers minus credentials and cookies."""
    return {
        key: value for key, value in request.headers.items()
        if key.lower() not in SENSITIVE_HEADERS
    }


def make_request_logger(slow_threshold_ms: int = 1000) -> DispatchFunction:
    """Build the request logging stage."""

    async def log_requests(
        request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        request_id = new_request_id()
        get_request_context(request).bind_request_id(request_id)
        reset_token = current_request_id.set(request_id)

        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "Unknown"
        status_code = 500
        try:
            logger.info(
                f"[{request_id}] Incoming {method} request to {path} from {client}",
                extra={"method": method, "path": path, "client": client},
            )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    f"[{request_id}] Request headers: {safe_headers(request)}",
                )
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as exc:
            # Same pure mapping the error stage applies on the way out
            status_code = map_exception(exc).status_code
            logger.error(
                f"[{request_id}] Unhandled exception occurred during request processing",
                exc_info=True,
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            extra = {
                "method": method, "path": path,
                "status_code": status_code, "elapsed_ms": round(elapsed_ms, 1),
            }
            logger.info(
                f"[{request_id}] Completed {method} {path} "
                f"with status {status_code} in {elapsed_ms:.0f}ms",
                extra=extra,
            )
            if elapsed_ms > slow_threshold_ms:
                logger.warning(
                    f"[{request_id}] Slow request detected: {method} {path} "
                    f"took {elapsed_ms:.0f}ms",
                    extra=extra,
                )
            current_request_id.reset(reset_token)

    return log_requests
