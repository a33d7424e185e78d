"""
Request/response logging middleware.

Binds ``request_id`` and the caller's ``user_id`` (from the X-User-Id
header) to structlog's contextvars, so every log line written while an
intake or export is processed carries them. Each request is then logged
once with its status and duration; export downloads also log the row
count reported by the endpoint.
"""

import logging
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mrlister.middleware.auth_middleware import USER_ID_HEADER, parse_user_id

logger = logging.getLogger("mrlister.api")

REQUEST_ID_HEADER = "X-Request-ID"
ROW_COUNT_HEADER = "X-Export-Row-Count"
QUIET_PATHS = frozenset({"/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every API request with timing and caller context.

    A client-supplied X-Request-ID is reused so scanner and label clients
    can correlate their own logs; otherwise a short id is generated. The id
    is echoed back in the response headers along with X-Response-Time.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        user_id = parse_user_id(request.headers.get(USER_ID_HEADER))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, user_id=user_id)

        start_time = time.monotonic()
        try:
            response = await call_next(request)
            duration_ms = round((time.monotonic() - start_time) * 1000, 1)

            if request.url.path not in QUIET_PATHS:
                extra = {
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "client": request.client.host if request.client else "unknown",
                }
                if ROW_COUNT_HEADER in response.headers:
                    extra["row_count"] = int(response.headers[ROW_COUNT_HEADER])
                log = logger.warning if response.status_code >= 500 else logger.info
                log(
                    f"{request.method} {request.url.path} → {response.status_code} "
                    f"({duration_ms}ms)",
                    extra=extra,
                )

            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
