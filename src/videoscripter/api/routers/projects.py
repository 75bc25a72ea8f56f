"""Project endpoints."""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.api.deps import get_current_user_id, get_db, get_project_service
from videoscripter.api.schemas.responses import ApiResponse
from videoscripter.exceptions import NotFoundError
from videoscripter.models.project import (
    ProjectBase,
    ProjectCreate,
    ProjectModel,
    ProjectUpdate,
)
from videoscripter.services.project_service import ProjectService

router = APIRouter()


@router.get("/projects", response_model=ApiResponse[List[ProjectModel]])
async def list_projects(
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[List[ProjectModel]]:
    """List the caller's projects, most recently modified first."""
    projects = await service.list_projects(session, user_id)
    return ApiResponse[List[ProjectModel]](data=projects)


@router.post(
    "/projects",
    response_model=ApiResponse[ProjectModel],
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectModel]:
    """Create a project owned by the caller."""
    project = await service.create_project(session, body, user_id)
    return ApiResponse[ProjectModel](data=project)


@router.get("/projects/{project_id}", response_model=ApiResponse[ProjectModel])
async def get_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectModel]:
    """Get one of the caller's projects."""
    project = await service.get_project(session, project_id, user_id)
    if project is None:
        raise NotFoundError("Project", str(project_id))
    return ApiResponse[ProjectModel](data=project)


@router.put("/projects/{project_id}", response_model=ApiResponse[ProjectModel])
async def update_project(
    project_id: uuid.UUID,
    body: ProjectBase,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
) -> ApiResponse[ProjectModel]:
    """Rename or re-topic one of the caller's projects."""
    project = await service.update_project(
        session, ProjectUpdate(id=project_id, name=body.name, topic=body.topic), user_id
    )
    if project is None:
        raise NotFoundError("Project", str(project_id))
    return ApiResponse[ProjectModel](data=project)


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service),
) -> Response:
    """Delete a project; its videos are kept unattached, its scripts deleted."""
    if not await service.delete_project(session, project_id, user_id):
        raise NotFoundError("Project", str(project_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
