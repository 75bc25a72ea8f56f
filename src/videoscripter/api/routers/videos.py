"""Video endpoints: project videos, ingestion and catalog search."""

from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.api.deps import (
    get_current_user_id,
    get_db,
    get_ingestion_service,
    get_project_service,
    get_video_service,
)
from videoscripter.api.schemas.responses import ApiResponse, ErrorCode
from videoscripter.api.schemas.videos import AddVideosBody
from videoscripter.exceptions import NotFoundError
from videoscripter.models.catalog import VideoMetadata
from videoscripter.models.video import (
    AddVideosToProjectRequest,
    AddVideosToProjectResponse,
    ProjectVideo,
)
from videoscripter.services.ingestion import IngestionService
from videoscripter.services.project_service import ProjectService
from videoscripter.services.video_service import VideoService

router = APIRouter()

# HTTP status for each failure classification of an ingestion response
INGESTION_STATUS = {
    ErrorCode.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorCode.VALIDATION_ERROR.value: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.DATABASE_ERROR.value: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR.value: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.get("/videos/search", response_model=ApiResponse[List[VideoMetadata]])
async def search_videos(
    q: str = Query(..., min_length=1, description="Search term"),
    max_results: Optional[int] = Query(default=None, ge=1, le=50),
    user_id: str = Depends(get_current_user_id),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[List[VideoMetadata]]:
    """Search the YouTube catalog."""
    results = await service.search_videos(q, max_results)
    return ApiResponse[List[VideoMetadata]](data=results)


@router.get("/videos/unattached", response_model=ApiResponse[List[ProjectVideo]])
async def list_unattached_videos(
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[List[ProjectVideo]]:
    """List videos the caller ingested that no longer belong to a project."""
    videos = await service.get_unattached_videos(session, user_id)
    return ApiResponse[List[ProjectVideo]](data=videos)


@router.get(
    "/projects/{project_id}/videos", response_model=ApiResponse[List[ProjectVideo]]
)
async def list_project_videos(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: VideoService = Depends(get_video_service),
    projects: ProjectService = Depends(get_project_service),
) -> ApiResponse[List[ProjectVideo]]:
    """List the videos of one of the caller's projects."""
    if not await projects.project_exists(session, project_id, user_id):
        raise NotFoundError("Project", str(project_id))
    videos = await service.get_project_videos(session, project_id, user_id)
    return ApiResponse[List[ProjectVideo]](data=videos)


@router.post(
    "/projects/{project_id}/videos", response_model=AddVideosToProjectResponse
)
async def add_videos_to_project(
    project_id: uuid.UUID,
    body: AddVideosBody,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: IngestionService = Depends(get_ingestion_service),
) -> JSONResponse:
    """
    Add catalog videos to a project.

    The body is always ``{"success", "message", "videoCount"}``; failures
    also set a 404, 422 or 500 status.
    """
    request = AddVideosToProjectRequest(project_id=project_id, video_ids=body.video_ids)
    result = await service.add_videos_to_project(session, request, user_id)
    status_code = (
        status.HTTP_200_OK
        if result.success
        else INGESTION_STATUS.get(result.error_code or "", status.HTTP_400_BAD_REQUEST)
    )
    return JSONResponse(
        status_code=status_code, content=result.model_dump(by_alias=True)
    )


@router.delete(
    "/projects/{project_id}/videos/{youtube_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_video_from_project(
    project_id: uuid.UUID,
    youtube_id: str,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: VideoService = Depends(get_video_service),
) -> Response:
    """Remove a video (and its transcript topics) from a project."""
    if not await service.remove_video_from_project(
        session, project_id, youtube_id, user_id
    ):
        raise NotFoundError("Video", youtube_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
