"""Request correlation ids.

Every request gets an id, taken from the ``X-Request-ID`` header when the
client sends a usable one and generated otherwise. The id is echoed on the
response, attached to error bodies and made available to log records through
``RequestIdFilter``.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

_request_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def get_request_id() -> str:
    """Current request id, or an empty string outside a request."""
    return _request_id.get()


def _resolve_request_id(header_value: str | None) -> str:
    """Accept a printable-ASCII client id (truncated), else generate one."""
    if not header_value:
        return str(uuid.uuid4())
    if not all(33 <= ord(c) <= 126 for c in header_value):
        logger.warning("Ignoring X-Request-ID with non-printable characters")
        return str(uuid.uuid4())
    return header_value[:MAX_REQUEST_ID_LENGTH]


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propagate a request id through the request and onto the response.

    Examples
    --------
    >>> app = FastAPI()
    >>> app.add_middleware(RequestIdMiddleware)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = _resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = _request_id.set(request_id)
        try:
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Logging filter exposing ``%(request_id)s`` to formatters ("-" if unset)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True
