"""Middleware components for the videoscripter API."""

from videoscripter.api.middleware.request_id import (
    RequestIdFilter,
    RequestIdMiddleware,
    get_request_id,
)

__all__ = [
    "RequestIdFilter",
    "RequestIdMiddleware",
    "get_request_id",
]
