"""
Error handling for the FastAPI app.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from reschedule_service.api.schemas.common import ErrorResponse
from reschedule_service.config.logging import get_logger
from reschedule_service.domain.exceptions.authorization_error import (
    PermissionDeniedError,
)
from reschedule_service.domain.exceptions.conflict_error import ConflictError
from reschedule_service.domain.exceptions.not_found_error import NotFoundError
from reschedule_service.domain.exceptions.store_error import StoreError
from reschedule_service.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)


def _error_body(error: str, message: str, error_type: str, **extra) -> dict:
    return ErrorResponse(
        error=error, message=message, type=error_type, **extra
    ).model_dump(exclude_none=True)


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=400,
            content=_error_body("Validation Error", str(exc), "validation_error"),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        logger.info("Not found", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=404,
            content=_error_body("Not Found", str(exc), "not_found"),
        )

    @app.exception_handler(PermissionDeniedError)
    async def permission_error_handler(request: Request, exc: PermissionDeniedError):
        logger.warning(
            "Permission denied",
            actor_id=str(exc.actor_id),
            action=exc.action,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=403,
            content=_error_body("Permission Denied", str(exc), "permission_denied"),
        )

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(request: Request, exc: ConflictError):
        logger.warning("Conflict", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=409,
            content=_error_body("Conflict", str(exc), "conflict"),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(
            "Store error", operation=exc.operation, error=exc.message, path=request.url.path
        )
        return JSONResponse(
            status_code=503,
            content=_error_body(
                "Store Error",
                f"{exc.operation} could not be completed; nothing was changed",
                "store_error",
                retryable=exc.retryable,
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP Error", str(exc.detail), "http_error"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Internal Server Error",
                "An unexpected error occurred",
                "internal_error",
            ),
        )
