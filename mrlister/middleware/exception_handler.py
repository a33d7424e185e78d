"""
Global exception handlers for the FastAPI application.

Catches:
1. MrListerError subclasses: maps to appropriate HTTP status codes.
2. Unhandled Exception: 500 Internal Server Error with a unique
   ``error_id`` for support correlation.

HTTPException is NOT handled here: FastAPI's built-in handler deals
with those (including the 401 raised by the auth dependency).
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mrlister.core.exceptions import (
    DuplicateSkuError,
    IdentityImmutableError,
    IntakeError,
    MrListerError,
    NotFoundError,
    UnsupportedMarketplaceError,
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers on the FastAPI app.

    Called from ``create_app()`` after all middleware and routers
    are registered.
    """

    @app.exception_handler(MrListerError)
    async def handle_mrlister_error(request: Request, exc: MrListerError) -> JSONResponse:
        """Map MrListerError subclasses to HTTP status codes."""
        status_code = _get_status_code(exc)
        log = logger.error if status_code >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_type": type(exc).__name__, "path": request.url.path},
        )
        content = {"detail": exc.message, "error_type": type(exc).__name__}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(Exception)
    async def handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions: log, return 500 with error_id."""
        error_id = uuid.uuid4().hex[:8]
        logger.exception(
            f"Unhandled exception (error_id={error_id})",
            extra={"error_id": error_id, "path": request.url.path},
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "error_id": error_id,
            },
        )


def _get_status_code(exc: MrListerError) -> int:
    """Map exception type to HTTP status code."""
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, UnsupportedMarketplaceError):
        return 400
    if isinstance(exc, (DuplicateSkuError, IdentityImmutableError)):
        return 409
    if isinstance(exc, IntakeError):
        return 422
    # Base MrListerError fallback
    return 500
