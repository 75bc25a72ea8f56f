"""
Script repository.
"""

from __future__ import annotations

import uuid
from typing import Any, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Script as ScriptDB
from videoscripter.models.script import ScriptCreate, ScriptUpdate
from videoscripter.repositories.base import BaseSQLAlchemyRepository


class ScriptRepository(
    BaseSQLAlchemyRepository[
        ScriptDB,
        ScriptCreate,
        ScriptUpdate,
    ]
):
    """Repository for project scripts."""

    def __init__(self) -> None:
        """Initialize repository with Script model."""
        super().__init__(ScriptDB)

    async def get_by_project(
        self, session: AsyncSession, project_id: uuid.UUID
    ) -> List[ScriptDB]:
        """Get a project's live scripts, most recently edited first."""
        result = await session.execute(
            self.select_active()
            .where(ScriptDB.project_id == project_id)
            .order_by(ScriptDB.last_modified_at.desc())
        )
        return list(result.scalars().all())

    async def get_in_project(
        self, session: AsyncSession, project_id: uuid.UUID, script_id: uuid.UUID
    ) -> Optional[ScriptDB]:
        """Get a live script only if it belongs to the given project."""
        result = await session.execute(
            self.select_active().where(
                ScriptDB.id == script_id, ScriptDB.project_id == project_id
            )
        )
        return result.scalar_one_or_none()

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ScriptDB,
        obj_in: Union[ScriptUpdate, dict[str, Any]],
        user_id: str,
    ) -> ScriptDB:
        """
        Edit a script, bumping ``version`` when title or content changes.

        Parameters
        ----------
        session : AsyncSession
            Database session
        db_obj : ScriptDB
            Script being edited
        obj_in : ScriptUpdate | dict
            Fields to change; unset fields are left alone
        user_id : str
            Editing user

        Returns
        -------
        ScriptDB
            The refreshed script
        """
        changes = (
            obj_in.model_dump(exclude_unset=True, exclude_none=True)
            if isinstance(obj_in, ScriptUpdate)
            else {k: v for k, v in obj_in.items() if v is not None}
        )
        changed = any(
            getattr(db_obj, field) != value
            for field, value in changes.items()
            if field in ("title", "content")
        )
        if changed:
            changes["version"] = db_obj.version + 1
        return await super().update(
            session, db_obj=db_obj, obj_in=changes, user_id=user_id
        )

    async def soft_delete_for_project(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> int:
        """Soft-delete every live script of a project; returns the count."""
        scripts = await self.get_by_project(session, project_id)
        for script in scripts:
            script.mark_deleted(user_id)
        await session.flush()
        return len(scripts)
