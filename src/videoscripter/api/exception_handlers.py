"""Centralized exception handlers for FastAPI.

Domain exceptions carry their own HTTP status and error code, so a single
handler renders all of them as ``{"code", "message", "details"}`` bodies.
Request validation and unexpected store failures get the same shape.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from videoscripter.api.middleware.request_id import get_request_id
from videoscripter.api.schemas.responses import ApiError, ErrorCode
from videoscripter.exceptions import VideoScripterError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    code: ErrorCode | str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    details = dict(details or {})
    request_id = get_request_id()
    if request_id:
        details["request_id"] = request_id
    error = ApiError(
        code=code.value if isinstance(code, ErrorCode) else code,
        message=message,
        details=details or None,
    )
    return JSONResponse(status_code=status_code, content=error.model_dump())


async def videoscripter_error_handler(
    request: Request, exc: VideoScripterError
) -> JSONResponse:
    """Render any domain exception using its status code and error code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code.value} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.error_code.value} on {request.url.path}: {exc.message}")
    api_error = exc.to_api_error()
    return _error_response(
        exc.status_code, api_error.code, api_error.message, api_error.details
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 422 VALIDATION_ERROR."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return _error_response(
        422,
        ErrorCode.VALIDATION_ERROR,
        "Request validation failed",
        {"errors": errors},
    )


async def database_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Render store failures that escaped the services as 500 DATABASE_ERROR."""
    logger.error(f"Database error on {request.url.path}", exc_info=exc)
    return _error_response(
        500, ErrorCode.DATABASE_ERROR, "A database error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the app."""
    app.add_exception_handler(VideoScripterError, videoscripter_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
