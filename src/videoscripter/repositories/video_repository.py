"""
Video repository.

Handles lookups used by ingestion (by external id, store-wide and per project),
the project video listing joined with channels, and the soft-delete cascades
that touch videos.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Channel as ChannelDB
from videoscripter.db.models import TranscriptTopic as TranscriptTopicDB
from videoscripter.db.models import Video as VideoDB
from videoscripter.repositories.base import BaseSQLAlchemyRepository, active


class VideoRepository(
    BaseSQLAlchemyRepository[
        VideoDB,
        Dict[str, Any],
        Dict[str, Any],
    ]
):
    """Repository for ingested videos."""

    def __init__(self) -> None:
        """Initialize repository with Video model."""
        super().__init__(VideoDB)

    async def get_active_by_youtube_id(
        self, session: AsyncSession, youtube_id: str
    ) -> Optional[VideoDB]:
        """
        Get the non-deleted video with the given external id, wherever it is.

        Parameters
        ----------
        session : AsyncSession
            Database session
        youtube_id : str
            YouTube video identifier

        Returns
        -------
        Optional[VideoDB]
            The live row, or None. At most one exists by the partial unique
            index on ``youtube_id``.
        """
        result = await session.execute(
            self.select_active().where(VideoDB.youtube_id == youtube_id)
        )
        return result.scalar_one_or_none()

    async def get_active_by_youtube_ids(
        self, session: AsyncSession, youtube_ids: Iterable[str]
    ) -> Dict[str, VideoDB]:
        """Map external id to live row for every id that has one."""
        ids = list(set(youtube_ids))
        if not ids:
            return {}
        result = await session.execute(
            self.select_active().where(VideoDB.youtube_id.in_(ids))
        )
        return {video.youtube_id: video for video in result.scalars().all()}

    async def get_in_project(
        self, session: AsyncSession, project_id: uuid.UUID, youtube_id: str
    ) -> Optional[VideoDB]:
        """Get a non-deleted video of a project by external id."""
        result = await session.execute(
            self.select_active().where(
                VideoDB.project_id == project_id,
                VideoDB.youtube_id == youtube_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_project_videos(
        self, session: AsyncSession, project_id: uuid.UUID
    ) -> List[Tuple[VideoDB, Optional[ChannelDB]]]:
        """
        List a project's non-deleted videos with their channels.

        Parameters
        ----------
        session : AsyncSession
            Database session
        project_id : uuid.UUID
            Project whose videos are listed

        Returns
        -------
        List[Tuple[VideoDB, Optional[ChannelDB]]]
            Videos newest first, each paired with its channel (None if the
            channel row is gone)
        """
        result = await session.execute(
            select(VideoDB, ChannelDB)
            .outerjoin(ChannelDB, ChannelDB.id == VideoDB.channel_id)
            .where(active(VideoDB), VideoDB.project_id == project_id)
            .order_by(VideoDB.published_at.desc(), VideoDB.youtube_id)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_unattached_for_user(
        self, session: AsyncSession, user_id: str
    ) -> List[Tuple[VideoDB, Optional[ChannelDB]]]:
        """List live videos without a project that ``user_id`` ingested."""
        result = await session.execute(
            select(VideoDB, ChannelDB)
            .outerjoin(ChannelDB, ChannelDB.id == VideoDB.channel_id)
            .where(
                active(VideoDB),
                VideoDB.project_id.is_(None),
                VideoDB.created_by == user_id,
            )
            .order_by(VideoDB.last_modified_at.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    async def count_active_for_channel(
        self, session: AsyncSession, channel_id: uuid.UUID
    ) -> int:
        """Count non-deleted videos owned by a channel."""
        result = await session.execute(
            select(func.count(VideoDB.id)).where(
                active(VideoDB), VideoDB.channel_id == channel_id
            )
        )
        return result.scalar() or 0

    async def detach_from_project(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> int:
        """
        Unattach every live video from a project.

        The videos stay non-deleted with ``project_id`` set to null.

        Returns
        -------
        int
            Number of videos detached
        """
        result = await session.execute(
            self.select_active().where(VideoDB.project_id == project_id)
        )
        videos = list(result.scalars().all())
        for video in videos:
            video.project_id = None
            video.touch(user_id)
        await session.flush()
        return len(videos)

    async def attach_to_project(
        self,
        session: AsyncSession,
        *,
        db_obj: VideoDB,
        project_id: uuid.UUID,
        user_id: str,
    ) -> VideoDB:
        """Attach an unattached video to a project."""
        db_obj.project_id = project_id
        db_obj.touch(user_id)
        session.add(db_obj)
        return db_obj

    async def soft_delete(
        self, session: AsyncSession, *, db_obj: VideoDB, user_id: str
    ) -> VideoDB:
        """Soft-delete a video together with its transcript topics."""
        result = await session.execute(
            select(TranscriptTopicDB).where(
                active(TranscriptTopicDB), TranscriptTopicDB.video_id == db_obj.id
            )
        )
        for topic in result.scalars().all():
            topic.mark_deleted(user_id)
        return await super().soft_delete(session, db_obj=db_obj, user_id=user_id)
