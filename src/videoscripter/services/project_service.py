"""
Project service.

Ownership-scoped queries and mutations for projects. A project owned by
another user, a deleted project and a missing project are all reported the
same way: ``None`` / ``False``.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Project as ProjectDB
from videoscripter.models.project import ProjectCreate, ProjectModel, ProjectUpdate
from videoscripter.repositories.project_repository import ProjectRepository
from videoscripter.repositories.script_repository import ScriptRepository
from videoscripter.repositories.video_repository import VideoRepository
from videoscripter.services.transactions import commit_or_raise

logger = logging.getLogger(__name__)


def to_project_model(
    project: ProjectDB, video_count: int = 0, script_count: int = 0
) -> ProjectModel:
    """Build the read projection of a project row."""
    return ProjectModel(
        id=project.id,
        name=project.name,
        topic=project.topic,
        created_at=project.created_at,
        last_modified_at=project.last_modified_at,
        video_count=video_count,
        script_count=script_count,
    )


class ProjectService:
    """Service for user projects."""

    def __init__(
        self,
        project_repository: Optional[ProjectRepository] = None,
        video_repository: Optional[VideoRepository] = None,
        script_repository: Optional[ScriptRepository] = None,
    ) -> None:
        self.project_repository = project_repository or ProjectRepository()
        self.video_repository = video_repository or VideoRepository()
        self.script_repository = script_repository or ScriptRepository()

    async def list_projects(
        self, session: AsyncSession, user_id: str
    ) -> List[ProjectModel]:
        """
        List a user's projects, most recently modified first.

        Parameters
        ----------
        session : AsyncSession
            Database session
        user_id : str
            Owner

        Returns
        -------
        List[ProjectModel]
            Projects with live video and script counts
        """
        rows = await self.project_repository.list_for_user_with_counts(
            session, user_id
        )
        return [to_project_model(*row) for row in rows]

    async def get_project(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> Optional[ProjectModel]:
        """Get one owned project with counts, or None."""
        row = await self.project_repository.get_owned_with_counts(
            session, project_id, user_id
        )
        if row is None:
            logger.warning(f"Project {project_id} not found for user {user_id}")
            return None
        return to_project_model(*row)

    async def project_exists(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> bool:
        """Check whether the user owns a live project with this id."""
        return await self.project_repository.exists_owned(session, project_id, user_id)

    async def create_project(
        self, session: AsyncSession, obj_in: ProjectCreate, user_id: str
    ) -> ProjectModel:
        """Create a project owned by ``user_id``."""
        project = await self.project_repository.create_for_user(
            session, obj_in=obj_in, user_id=user_id
        )
        await commit_or_raise(session, operation="create", entity_type="Project")
        logger.info(f"Created project {project.id} '{project.name}' for {user_id}")
        return to_project_model(project)

    async def update_project(
        self, session: AsyncSession, obj_in: ProjectUpdate, user_id: str
    ) -> Optional[ProjectModel]:
        """
        Rename or re-topic an owned project.

        Returns
        -------
        Optional[ProjectModel]
            The updated project, or None if the user owns no such project
        """
        project = await self.project_repository.get_owned(session, obj_in.id, user_id)
        if project is None:
            logger.warning(f"Cannot update project {obj_in.id}: not found")
            return None

        await self.project_repository.update(
            session,
            db_obj=project,
            obj_in={"name": obj_in.name, "topic": obj_in.topic},
            user_id=user_id,
        )
        await commit_or_raise(session, operation="update", entity_type="Project")
        logger.info(f"Updated project {project.id}")
        return await self.get_project(session, obj_in.id, user_id)

    async def delete_project(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> bool:
        """
        Soft-delete an owned project.

        The project's videos are kept and unattached (``project_id`` set to
        null); its scripts are soft-deleted. Everything is committed together.

        Returns
        -------
        bool
            True if the project was deleted, False if not found
        """
        project = await self.project_repository.get_owned(session, project_id, user_id)
        if project is None:
            logger.warning(f"Cannot delete project {project_id}: not found")
            return False

        detached = await self.video_repository.detach_from_project(
            session, project_id, user_id
        )
        scripts = await self.script_repository.soft_delete_for_project(
            session, project_id, user_id
        )
        await self.project_repository.soft_delete(
            session, db_obj=project, user_id=user_id
        )
        await commit_or_raise(session, operation="delete", entity_type="Project")

        logger.info(
            f"Deleted project {project_id}: {detached} video(s) unattached, "
            f"{scripts} script(s) deleted"
        )
        return True
