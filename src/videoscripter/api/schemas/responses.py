"""API response envelope schemas."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standardized error codes for API responses.

    4xx Client Errors:
        NOT_FOUND: Resource does not exist or is not yours (404)
        VALIDATION_ERROR: Request validation failed (422)
        NOT_AUTHENTICATED: Caller identity missing (401)
        CONFLICT: Resource conflict (409)

    5xx Server Errors:
        INTERNAL_ERROR: Unexpected server error (500)
        DATABASE_ERROR: Database operation failed (500)
        EXTERNAL_SERVICE_ERROR: YouTube API unavailable (502)
    """

    # 4xx Client Errors
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    CONFLICT = "CONFLICT"

    # 5xx Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T


class ApiError(BaseModel):
    """Standard error response."""

    model_config = ConfigDict(strict=True)

    code: str  # Machine-readable error code (e.g., NOT_FOUND)
    message: str  # Human-readable message
    details: dict[str, Any] | None = None

