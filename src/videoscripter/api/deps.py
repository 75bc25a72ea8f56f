"""FastAPI dependencies for API endpoints."""

from collections.abc import AsyncGenerator
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.config.database import db_manager
from videoscripter.container import container
from videoscripter.models.youtube_types import validate_user_id
from videoscripter.services.ingestion import IngestionService
from videoscripter.services.interfaces import CatalogServiceInterface
from videoscripter.services.project_service import ProjectService
from videoscripter.services.script_service import ScriptService
from videoscripter.services.video_service import VideoService

USER_ID_HEADER = "X-User-Id"


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for database session.

    Yields an async SQLAlchemy session that auto-commits on success
    and rolls back on exception.

    Yields
    ------
    AsyncSession
        An async SQLAlchemy session for database operations.
    """
    async for session in db_manager.get_session():
        yield session


async def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """
    Dependency resolving the calling user from the ``X-User-Id`` header.

    Identity is asserted by the caller (an upstream gateway); it is not
    verified here.

    Raises
    ------
    HTTPException
        401 if the header is missing or blank, 422 if it is malformed.
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "code": "NOT_AUTHENTICATED",
                "message": f"Missing {USER_ID_HEADER} header",
            },
        )
    try:
        return validate_user_id(x_user_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"code": "VALIDATION_ERROR", "message": str(e)},
        ) from e


def get_catalog() -> CatalogServiceInterface:
    """Dependency for the catalog client (overridden with a mock in tests)."""
    return container.youtube_service


def get_ingestion_service(
    catalog: CatalogServiceInterface = Depends(get_catalog),
) -> IngestionService:
    """Dependency for the ingestion service."""
    return IngestionService(catalog=catalog)


def get_project_service() -> ProjectService:
    """Dependency for the project service."""
    return container.create_project_service()


def get_video_service(
    catalog: CatalogServiceInterface = Depends(get_catalog),
) -> VideoService:
    """Dependency for the video service."""
    return VideoService(catalog=catalog)


def get_script_service() -> ScriptService:
    """Dependency for the script service."""
    return container.create_script_service()
