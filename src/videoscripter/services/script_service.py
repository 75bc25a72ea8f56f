"""
Script service.

Scripts live inside projects; every operation first checks that the caller
owns the project.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.exceptions import NotFoundError
from videoscripter.models.script import ScriptCreate, ScriptModel, ScriptUpdate
from videoscripter.repositories.project_repository import ProjectRepository
from videoscripter.repositories.script_repository import ScriptRepository
from videoscripter.services.transactions import commit_or_raise

logger = logging.getLogger(__name__)


class ScriptService:
    """Service for project scripts."""

    def __init__(
        self,
        project_repository: Optional[ProjectRepository] = None,
        script_repository: Optional[ScriptRepository] = None,
    ) -> None:
        self.project_repository = project_repository or ProjectRepository()
        self.script_repository = script_repository or ScriptRepository()

    async def _require_project(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> None:
        if not await self.project_repository.exists_owned(session, project_id, user_id):
            raise NotFoundError("Project", str(project_id))

    async def create_script(
        self,
        session: AsyncSession,
        project_id: uuid.UUID,
        obj_in: ScriptCreate,
        user_id: str,
    ) -> ScriptModel:
        """
        Create a script in an owned project.

        Raises
        ------
        NotFoundError
            If the user owns no such project
        """
        await self._require_project(session, project_id, user_id)
        script = await self.script_repository.create(
            session, obj_in=obj_in, user_id=user_id, project_id=project_id
        )
        await commit_or_raise(session, operation="create", entity_type="Script")
        logger.info(f"Created script {script.id} in project {project_id}")
        return ScriptModel.model_validate(script)

    async def list_scripts(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> List[ScriptModel]:
        """List the live scripts of an owned project."""
        await self._require_project(session, project_id, user_id)
        scripts = await self.script_repository.get_by_project(session, project_id)
        return [ScriptModel.model_validate(script) for script in scripts]

    async def update_script(
        self,
        session: AsyncSession,
        project_id: uuid.UUID,
        script_id: uuid.UUID,
        obj_in: ScriptUpdate,
        user_id: str,
    ) -> Optional[ScriptModel]:
        """
        Edit a script; the version increases when title or content change.

        Returns
        -------
        Optional[ScriptModel]
            The edited script, or None if project or script not found
        """
        if not await self.project_repository.exists_owned(session, project_id, user_id):
            return None
        script = await self.script_repository.get_in_project(
            session, project_id, script_id
        )
        if script is None:
            logger.warning(f"Script {script_id} not found in project {project_id}")
            return None

        script = await self.script_repository.update(
            session, db_obj=script, obj_in=obj_in, user_id=user_id
        )
        await commit_or_raise(session, operation="update", entity_type="Script")
        logger.info(f"Updated script {script_id} (version {script.version})")
        return ScriptModel.model_validate(script)

    async def delete_script(
        self,
        session: AsyncSession,
        project_id: uuid.UUID,
        script_id: uuid.UUID,
        user_id: str,
    ) -> bool:
        """Soft-delete a script of an owned project; False if not found."""
        if not await self.project_repository.exists_owned(session, project_id, user_id):
            return False
        script = await self.script_repository.get_in_project(
            session, project_id, script_id
        )
        if script is None:
            return False

        await self.script_repository.soft_delete(
            session, db_obj=script, user_id=user_id
        )
        await commit_or_raise(session, operation="delete", entity_type="Script")
        logger.info(f"Deleted script {script_id} from project {project_id}")
        return True
