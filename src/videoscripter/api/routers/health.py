"""Health check endpoint - no identity required."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter import __version__
from videoscripter.api.deps import get_db
from videoscripter.api.schemas.responses import ApiResponse
from videoscripter.config.settings import settings

logger = logging.getLogger(__name__)


class HealthStatus(BaseModel):
    """Application health status."""

    model_config = ConfigDict(strict=True)

    status: str  # "healthy", "unhealthy"
    version: str
    database: str  # "connected", "disconnected"
    youtube_configured: bool
    database_latency_ms: Optional[int] = None
    timestamp: datetime


class HealthResponse(ApiResponse[HealthStatus]):
    """Response for health check endpoint."""

    pass


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(session: AsyncSession = Depends(get_db)) -> HealthResponse:
    """
    Health check endpoint.

    Reports database connectivity, whether a YouTube API key is configured,
    and the application version.
    """
    db_status = "disconnected"
    db_latency_ms: Optional[int] = None
    try:
        start = time.monotonic()
        await session.execute(text("SELECT 1"))
        db_latency_ms = int((time.monotonic() - start) * 1000)
        db_status = "connected"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)

    return HealthResponse(
        data=HealthStatus(
            status="healthy" if db_status == "connected" else "unhealthy",
            version=__version__,
            database=db_status,
            youtube_configured=bool(settings.youtube_api_key),
            database_latency_ms=db_latency_ms,
            timestamp=datetime.now(timezone.utc),
        )
    )
