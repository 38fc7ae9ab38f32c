"""
Shared exception handlers.

Maps data-layer errors to HTTP responses:
- ValidationError -> 400
- ForbiddenError  -> 403
- NotFoundError   -> 404
Anything else is logged and returned as a generic 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from blogadmin.errors import AdminError

logger = logging.getLogger(__name__)


async def admin_error_handler(request: Request, exc: AdminError) -> JSONResponse:
    logger.info(
        "Request failed",
        extra={
            "path": request.url.path,
            "error_type": type(exc).__name__,
            "status_code": exc.http_status,
            "error_message": exc.message,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions with proper logging."""
    logger.error(
        "Unhandled exception",
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AdminError, admin_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
