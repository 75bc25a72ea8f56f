"""
Video service.

Read access to a project's videos, catalog search, and removal of videos
from projects.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.config.settings import settings
from videoscripter.db.models import Channel as ChannelDB
from videoscripter.db.models import Video as VideoDB
from videoscripter.exceptions import InvalidInputError
from videoscripter.models.catalog import VideoMetadata
from videoscripter.models.video import ProjectVideo
from videoscripter.repositories.project_repository import ProjectRepository
from videoscripter.repositories.video_repository import VideoRepository
from videoscripter.services.ingestion.channel_resolver import UNKNOWN_CHANNEL_TITLE
from videoscripter.services.interfaces import CatalogServiceInterface
from videoscripter.services.transactions import commit_or_raise

logger = logging.getLogger(__name__)


def to_project_video(video: VideoDB, channel: Optional[ChannelDB]) -> ProjectVideo:
    """Build the read projection of a video joined with its channel."""
    channel_title = channel.title if channel is not None else ""
    return ProjectVideo(
        id=video.id,
        youtube_id=video.youtube_id,
        title=video.title,
        description=video.description,
        channel_youtube_id=channel.youtube_id if channel is not None else "",
        channel_title=channel_title.strip() or UNKNOWN_CHANNEL_TITLE,
        published_at=video.published_at,
        view_count=video.view_count,
        like_count=video.like_count,
        comment_count=video.comment_count,
        duration_seconds=video.duration,
    )


class VideoService:
    """Service for project videos and catalog search."""

    def __init__(
        self,
        catalog: CatalogServiceInterface,
        project_repository: Optional[ProjectRepository] = None,
        video_repository: Optional[VideoRepository] = None,
    ) -> None:
        self.catalog = catalog
        self.project_repository = project_repository or ProjectRepository()
        self.video_repository = video_repository or VideoRepository()

    async def get_project_videos(
        self, session: AsyncSession, project_id: uuid.UUID, user_id: str
    ) -> List[ProjectVideo]:
        """
        List the live videos of an owned project.

        Parameters
        ----------
        session : AsyncSession
            Database session
        project_id : uuid.UUID
            Project to list
        user_id : str
            Expected owner

        Returns
        -------
        List[ProjectVideo]
            Videos with channel titles; empty if the project is not found
        """
        if not await self.project_repository.exists_owned(session, project_id, user_id):
            logger.warning(f"Project {project_id} not found for user {user_id}")
            return []
        rows = await self.video_repository.get_project_videos(session, project_id)
        return [to_project_video(video, channel) for video, channel in rows]

    async def get_unattached_videos(
        self, session: AsyncSession, user_id: str
    ) -> List[ProjectVideo]:
        """List live videos without a project that the user ingested."""
        rows = await self.video_repository.get_unattached_for_user(session, user_id)
        return [to_project_video(video, channel) for video, channel in rows]

    async def search_videos(
        self, query: str, max_results: Optional[int] = None
    ) -> List[VideoMetadata]:
        """
        Search the catalog.

        Raises
        ------
        InvalidInputError
            If the query is blank
        YouTubeAPIError
            If the catalog call fails
        """
        if not query or not query.strip():
            raise InvalidInputError("Search term cannot be empty", field_name="q")
        limit = max_results or settings.search_max_results
        results = await self.catalog.search(query.strip(), limit)
        logger.info(f"Search '{query.strip()}' returned {len(results)} video(s)")
        return results

    async def remove_video_from_project(
        self,
        session: AsyncSession,
        project_id: uuid.UUID,
        youtube_id: str,
        user_id: str,
    ) -> bool:
        """
        Soft-delete a video of an owned project and its transcript topics.

        Returns
        -------
        bool
            True if a video was removed, False if project or video not found
        """
        if not await self.project_repository.exists_owned(session, project_id, user_id):
            logger.warning(f"Project {project_id} not found for user {user_id}")
            return False

        video = await self.video_repository.get_in_project(
            session, project_id, youtube_id
        )
        if video is None:
            logger.warning(f"Video {youtube_id} not found in project {project_id}")
            return False

        await self.video_repository.soft_delete(session, db_obj=video, user_id=user_id)
        await commit_or_raise(session, operation="delete", entity_type="Video")
        logger.info(f"Removed video {youtube_id} from project {project_id}")
        return True
