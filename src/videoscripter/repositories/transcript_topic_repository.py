"""
Transcript topic repository.

Topics are segments of a video transcript that a user can select as source
material for a script.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import TranscriptTopic as TranscriptTopicDB
from videoscripter.models.transcript_topic import TranscriptTopicCreate
from videoscripter.repositories.base import BaseSQLAlchemyRepository


class TranscriptTopicRepository(
    BaseSQLAlchemyRepository[
        TranscriptTopicDB,
        TranscriptTopicCreate,
        TranscriptTopicCreate,
    ]
):
    """Repository for transcript topics."""

    def __init__(self) -> None:
        """Initialize repository with TranscriptTopic model."""
        super().__init__(TranscriptTopicDB)

    async def get_by_video(
        self,
        session: AsyncSession,
        video_id: uuid.UUID,
        *,
        selected_only: bool = False,
    ) -> List[TranscriptTopicDB]:
        """
        Get a video's live topics in transcript order.

        Parameters
        ----------
        session : AsyncSession
            Database session
        video_id : uuid.UUID
            Internal video identifier
        selected_only : bool, optional
            Only return topics marked as selected (default: False)

        Returns
        -------
        List[TranscriptTopicDB]
            Topics ordered by ``start_time``
        """
        query = self.select_active().where(TranscriptTopicDB.video_id == video_id)
        if selected_only:
            query = query.where(TranscriptTopicDB.is_selected.is_(True))
        result = await session.execute(query.order_by(TranscriptTopicDB.start_time))
        return list(result.scalars().all())

    async def set_selected(
        self,
        session: AsyncSession,
        topic_id: uuid.UUID,
        selected: bool,
        user_id: str,
    ) -> Optional[TranscriptTopicDB]:
        """Mark a live topic as selected or not; returns None if absent."""
        topic = await self.get(session, topic_id)
        if topic is None:
            return None
        topic.is_selected = selected
        topic.touch(user_id)
        await session.flush()
        return topic
