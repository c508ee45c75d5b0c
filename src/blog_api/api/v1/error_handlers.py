# blog_api/api/v1/error_handlers.py
"""
FastAPI exception handlers mapping app-level errors to HTTP responses.

    register_exception_handlers(app)

Repositories and loaders raise blog_api.exceptions.base.* errors; the status
comes from .http_status() (DbError -> 500, NotFound -> 404, InvalidField -> 400)
and the body from .to_payload(), which never contains internal_cause.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blog_api.exceptions.base import AppError, DatabaseError, InvalidFieldError, NotFoundError

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("api.not_found", extra={"method": request.method, "path": request.url.path})
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def invalid_field_handler(request: Request, exc: InvalidFieldError) -> JSONResponse:
    logger.info("api.invalid_field", extra={"method": request.method, "path": request.url.path})
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Fallback for DatabaseError (and any other AppError) -> 500.
    internal_cause is logged here for triage, the client only sees the generic message.
    """
    logger.error(
        "api.app_error",
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_kind": exc.kind.value,
            "internal_cause": exc.internal_cause,
        },
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


# Helper to register all handlers on an app (call this from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidFieldError, invalid_field_handler)
    app.add_exception_handler(DatabaseError, app_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
