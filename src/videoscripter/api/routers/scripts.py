"""Script endpoints."""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.api.deps import get_current_user_id, get_db, get_script_service
from videoscripter.api.schemas.responses import ApiResponse
from videoscripter.exceptions import NotFoundError
from videoscripter.models.script import ScriptCreate, ScriptModel, ScriptUpdate
from videoscripter.services.script_service import ScriptService

router = APIRouter()


@router.get(
    "/projects/{project_id}/scripts", response_model=ApiResponse[List[ScriptModel]]
)
async def list_scripts(
    project_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ScriptService = Depends(get_script_service),
) -> ApiResponse[List[ScriptModel]]:
    """List the scripts of one of the caller's projects."""
    scripts = await service.list_scripts(session, project_id, user_id)
    return ApiResponse[List[ScriptModel]](data=scripts)


@router.post(
    "/projects/{project_id}/scripts",
    response_model=ApiResponse[ScriptModel],
    status_code=status.HTTP_201_CREATED,
)
async def create_script(
    project_id: uuid.UUID,
    body: ScriptCreate,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ScriptService = Depends(get_script_service),
) -> ApiResponse[ScriptModel]:
    """Create a script in one of the caller's projects."""
    script = await service.create_script(session, project_id, body, user_id)
    return ApiResponse[ScriptModel](data=script)


@router.put(
    "/projects/{project_id}/scripts/{script_id}",
    response_model=ApiResponse[ScriptModel],
)
async def update_script(
    project_id: uuid.UUID,
    script_id: uuid.UUID,
    body: ScriptUpdate,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ScriptService = Depends(get_script_service),
) -> ApiResponse[ScriptModel]:
    """Edit a script; its version increases when title or content change."""
    script = await service.update_script(session, project_id, script_id, body, user_id)
    if script is None:
        raise NotFoundError("Script", str(script_id))
    return ApiResponse[ScriptModel](data=script)


@router.delete(
    "/projects/{project_id}/scripts/{script_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_script(
    project_id: uuid.UUID,
    script_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    service: ScriptService = Depends(get_script_service),
) -> Response:
    """Delete a script."""
    if not await service.delete_script(session, project_id, script_id, user_id):
        raise NotFoundError("Script", str(script_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
