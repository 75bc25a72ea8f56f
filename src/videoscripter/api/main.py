"""FastAPI application for the videoscripter API."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from videoscripter import __version__
from videoscripter.api.exception_handlers import register_exception_handlers
from videoscripter.api.middleware import RequestIdFilter, RequestIdMiddleware
from videoscripter.api.routers import health, projects, scripts, videos
from videoscripter.config.database import db_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Tags records of the root handlers with the request id on startup and
    disposes the engine on shutdown.
    """
    for handler in logging.getLogger().handlers:
        handler.addFilter(RequestIdFilter())
    yield
    await db_manager.close()


app = FastAPI(
    title="VideoScripter API",
    description="Collect YouTube videos into projects and draft scripts from them",
    version=__version__,
    lifespan=lifespan,
)


def _get_client_ip(request: Request) -> str:
    """Extract client IP from request, honouring ``X-Forwarded-For``."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


@app.middleware("http")
async def log_requests(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """
    Log each request and its response.

    Responses are logged at INFO for 2xx/3xx, WARNING for 4xx and ERROR
    for 5xx, with the elapsed time.
    """
    start_time = time.perf_counter()
    method = request.method
    path = request.url.path
    logger.info("Request: %s %s from %s", method, path, _get_client_ip(request))

    response = await call_next(request)

    duration = time.perf_counter() - start_time
    status_code = response.status_code
    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO
    logger.log(
        log_level,
        "Response: %s %s - %d (%.3fs)",
        method,
        path,
        status_code,
        duration,
    )
    return response


# Added last so it wraps the logging middleware and ids reach its log lines
app.add_middleware(RequestIdMiddleware)
register_exception_handlers(app)

app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(projects.router, prefix="/api/v1", tags=["projects"])
app.include_router(videos.router, prefix="/api/v1", tags=["videos"])
app.include_router(scripts.router, prefix="/api/v1", tags=["scripts"])
