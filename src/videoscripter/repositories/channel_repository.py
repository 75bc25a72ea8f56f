"""
Channel repository for YouTube channels referenced by ingested videos.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Channel as ChannelDB
from videoscripter.exceptions import ChannelInUseError
from videoscripter.repositories.base import BaseSQLAlchemyRepository
from videoscripter.repositories.video_repository import VideoRepository

logger = logging.getLogger(__name__)


class ChannelRepository(
    BaseSQLAlchemyRepository[
        ChannelDB,
        Dict[str, Any],
        Dict[str, Any],
    ]
):
    """Repository for channels with referential delete protection."""

    def __init__(self) -> None:
        """Initialize repository with Channel model."""
        super().__init__(ChannelDB)

    async def get_by_youtube_id(
        self, session: AsyncSession, youtube_id: str
    ) -> Optional[ChannelDB]:
        """
        Get the non-deleted channel with the given YouTube channel ID.

        Parameters
        ----------
        session : AsyncSession
            Database session
        youtube_id : str
            YouTube channel identifier

        Returns
        -------
        Optional[ChannelDB]
            Channel if found, None otherwise
        """
        result = await session.execute(
            self.select_active().where(ChannelDB.youtube_id == youtube_id)
        )
        return result.scalar_one_or_none()

    async def soft_delete(
        self, session: AsyncSession, *, db_obj: ChannelDB, user_id: str
    ) -> ChannelDB:
        """
        Soft-delete a channel that no longer owns any live video.

        Raises
        ------
        ChannelInUseError
            If any non-deleted video still references the channel. Nothing
            is changed in that case.
        """
        video_count = await VideoRepository().count_active_for_channel(
            session, db_obj.id
        )
        if video_count:
            logger.warning(
                f"Refusing to delete channel {db_obj.youtube_id}: "
                f"{video_count} video(s) still reference it"
            )
            raise ChannelInUseError(db_obj.youtube_id, video_count)
        return await super().soft_delete(session, db_obj=db_obj, user_id=user_id)
