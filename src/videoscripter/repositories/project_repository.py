"""
Project repository for user-owned projects.

Every lookup is scoped by owner and excludes deleted projects, so a project
that belongs to someone else looks exactly like one that does not exist.
"""

from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Project as ProjectDB
from videoscripter.db.models import Script as ScriptDB
from videoscripter.db.models import Video as VideoDB
from videoscripter.models.project import ProjectCreate, ProjectUpdate
from videoscripter.repositories.base import BaseSQLAlchemyRepository, active

# (project, non-deleted video count, non-deleted script count)
ProjectWithCounts = Tuple[ProjectDB, int, int]


class ProjectRepository(
    BaseSQLAlchemyRepository[
        ProjectDB,
        ProjectCreate,
        ProjectUpdate,
    ]
):
    """Repository for projects with per-owner scoping."""

    def __init__(self) -> None:
        """Initialize repository with Project model."""
        super().__init__(ProjectDB)

    def _owned(self, user_id: str) -> Select[tuple[ProjectDB]]:
        return self.select_active().where(ProjectDB.user_id == user_id)

    def _with_counts(self) -> Select[tuple[ProjectDB, int, int]]:
        video_count = (
            select(func.count(VideoDB.id))
            .where(VideoDB.project_id == ProjectDB.id, active(VideoDB))
            .correlate(ProjectDB)
            .scalar_subquery()
        )
        script_count = (
            select(func.count(ScriptDB.id))
            .where(ScriptDB.project_id == ProjectDB.id, active(ScriptDB))
            .correlate(ProjectDB)
            .scalar_subquery()
        )
        return select(ProjectDB, video_count, script_count).where(active(ProjectDB))

    async def create_for_user(
        self, session: AsyncSession, *, obj_in: ProjectCreate, user_id: str
    ) -> ProjectDB:
        """
        Create a project owned by ``user_id``.

        Parameters
        ----------
        session : AsyncSession
            Database session
        obj_in : ProjectCreate
            Validated project fields
        user_id : str
            Owner and creator of the project

        Returns
        -------
        ProjectDB
            The flushed project row
        """
        # build() reserves ``user_id`` for the audit stamp; set the owner after
        db_obj = self.build(obj_in, user_id=user_id)
        db_obj.user_id = user_id
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def get_owned(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> Optional[ProjectDB]:
        """
        Get a non-deleted project owned by ``user_id``.

        Parameters
        ----------
        session : AsyncSession
            Database session
        project_id : uuid.UUID
            Internal project identifier
        user_id : str
            Expected owner

        Returns
        -------
        Optional[ProjectDB]
            The project, or None if absent, deleted or owned by someone else
        """
        result = await session.execute(
            self._owned(user_id).where(ProjectDB.id == project_id)
        )
        return result.scalar_one_or_none()

    async def exists_owned(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> bool:
        """Check if a non-deleted project owned by ``user_id`` exists."""
        result = await session.execute(
            select(ProjectDB.id).where(
                active(ProjectDB),
                ProjectDB.id == project_id,
                ProjectDB.user_id == user_id,
            )
        )
        return result.first() is not None

    async def list_for_user_with_counts(
        self, session: AsyncSession, user_id: str
    ) -> List[ProjectWithCounts]:
        """
        List a user's projects, most recently modified first.

        Parameters
        ----------
        session : AsyncSession
            Database session
        user_id : str
            Owner whose projects are listed

        Returns
        -------
        List[ProjectWithCounts]
            Tuples of (project, video count, script count)
        """
        result = await session.execute(
            self._with_counts()
            .where(ProjectDB.user_id == user_id)
            .order_by(ProjectDB.last_modified_at.desc())
        )
        return [(row[0], int(row[1] or 0), int(row[2] or 0)) for row in result.all()]

    async def get_owned_with_counts(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> Optional[ProjectWithCounts]:
        """Get one owned project with its live video and script counts."""
        result = await session.execute(
            self._with_counts().where(
                ProjectDB.id == project_id, ProjectDB.user_id == user_id
            )
        )
        row = result.first()
        if row is None:
            return None
        return row[0], int(row[1] or 0), int(row[2] or 0)
