"""
Video ingestion pipeline.

Turns a batch of YouTube video ids into Video rows attached to a project:
validates the batch, checks ownership, deduplicates against the batch and the
store, resolves videos and their channels through the catalog, and writes
everything in a single transaction.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.api.schemas.responses import ErrorCode
from videoscripter.db.models import Project as ProjectDB
from videoscripter.db.models import Video as VideoDB
from videoscripter.exceptions import (
    ChannelResolutionError,
    InvalidInputError,
    NotFoundError,
    StoreError,
    YouTubeAPIError,
)
from videoscripter.models.catalog import VideoMetadata
from videoscripter.models.enums import SkipReason
from videoscripter.models.ingestion import IngestionResult
from videoscripter.models.video import (
    AddVideosToProjectRequest,
    AddVideosToProjectResponse,
)
from videoscripter.repositories.channel_repository import ChannelRepository
from videoscripter.repositories.project_repository import ProjectRepository
from videoscripter.repositories.video_repository import VideoRepository
from videoscripter.services.interfaces import CatalogServiceInterface

from .channel_resolver import ChannelResolver

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "Project not found or you don't have access to it"


def _normalize_ids(video_ids: Optional[Sequence[str]]) -> List[str]:
    if not video_ids:
        raise InvalidInputError(
            "At least one video ID is required", field_name="video_ids"
        )
    normalized = []
    for raw in video_ids:
        video_id = raw.strip() if isinstance(raw, str) else ""
        if not video_id:
            raise InvalidInputError(
                "Video IDs cannot be empty",
                field_name="video_ids",
                invalid_value=raw,
            )
        normalized.append(video_id)
    return normalized


class IngestionService:
    """
    Service adding catalog videos to projects.

    Parameters
    ----------
    catalog : CatalogServiceInterface
        Catalog used to resolve videos and channels
    project_repository, video_repository, channel_repository : optional
        Store access; defaults are created when omitted
    """

    def __init__(
        self,
        catalog: CatalogServiceInterface,
        project_repository: Optional[ProjectRepository] = None,
        video_repository: Optional[VideoRepository] = None,
        channel_repository: Optional[ChannelRepository] = None,
    ) -> None:
        self.catalog = catalog
        self.project_repository = project_repository or ProjectRepository()
        self.video_repository = video_repository or VideoRepository()
        self.channel_repository = channel_repository or ChannelRepository()

    async def ingest(
        self,
        session: AsyncSession,
        project_id: uuid.UUID,
        owner_id: str,
        video_ids: Sequence[str],
    ) -> IngestionResult:
        """
        Ingest a batch of video ids into a project.

        Each id is handled independently in input order; unresolvable ids
        and duplicates are skipped and recorded with a reason. All writes
        are committed together at the end of the batch.

        Parameters
        ----------
        session : AsyncSession
            Session owning the batch transaction
        project_id : uuid.UUID
            Target project
        owner_id : str
            Calling user; must own the project
        video_ids : Sequence[str]
            YouTube video ids, in input order

        Returns
        -------
        IngestionResult
            Counts of added and reattached videos, created channels and the
            skipped ids with their reasons

        Raises
        ------
        InvalidInputError
            If the batch or the owner id is empty or blank
        NotFoundError
            If the project is absent, deleted or owned by someone else
        StoreError
            If any store access fails; nothing from the batch is persisted
        """
        owner_id = (owner_id or "").strip()
        if not owner_id:
            raise InvalidInputError("User ID is required", field_name="user_id")
        ids = _normalize_ids(video_ids)

        try:
            return await self._ingest_batch(session, project_id, owner_id, ids)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(
                f"Ingestion into project {project_id} failed; rolled back",
                exc_info=True,
            )
            raise StoreError(
                "Failed to save videos",
                operation="ingest",
                entity_type="Video",
                original_error=e,
            ) from e

    async def _ingest_batch(
        self,
        session: AsyncSession,
        project_id: uuid.UUID,
        owner_id: str,
        ids: List[str],
    ) -> IngestionResult:
        project = await self.project_repository.get_owned(session, project_id, owner_id)
        if project is None:
            logger.warning(
                f"Ingestion rejected: project {project_id} not found for user {owner_id}"
            )
            raise NotFoundError("Project", str(project_id))

        logger.info(
            f"Ingesting {len(ids)} video(s) into project {project_id} for {owner_id}"
        )

        result = IngestionResult()
        resolver = ChannelResolver(
            session, self.catalog, self.channel_repository, owner_id
        )
        existing = await self.video_repository.get_active_by_youtube_ids(session, ids)
        seen: set[str] = set()
        new_videos: List[VideoDB] = []
        reattached: List[VideoDB] = []

        for video_id in ids:
            stored = existing.get(video_id)
            if video_id in seen or (
                stored is not None and stored.project_id == project.id
            ):
                self._skip(result, video_id, SkipReason.DUPLICATE_IN_PROJECT)
                continue
            seen.add(video_id)

            if stored is not None:
                if stored.project_id is not None:
                    self._skip(result, video_id, SkipReason.ATTACHED_TO_OTHER_PROJECT)
                elif stored.created_by != owner_id:
                    # Unattached rows stay with the user who ingested them
                    self._skip(result, video_id, SkipReason.OWNED_BY_OTHER_USER)
                else:
                    reattached.append(stored)
                    result.added_count += 1
                    result.reattached_count += 1
                continue

            metadata = await self._fetch_video(video_id)
            if metadata is None:
                self._skip(result, video_id, SkipReason.UNRESOLVABLE)
                continue

            try:
                channel_id = await resolver.resolve(metadata.channel_id)
            except ChannelResolutionError as e:
                logger.warning(f"Video {video_id}: {e.message}")
                self._skip(result, video_id, SkipReason.CHANNEL_UNRESOLVABLE)
                continue

            new_videos.append(
                self._build_video(metadata, project.id, channel_id, owner_id)
            )
            result.added_count += 1

        result.channels_created = await self._commit(
            session, project, resolver, new_videos, reattached, owner_id
        )

        logger.info(
            f"Ingestion into project {project_id} finished: "
            f"{result.total_processed} processed, "
            f"{result.added_count} added ({result.reattached_count} reattached), "
            f"{result.skipped_count} skipped, "
            f"{result.channels_created} new channel(s)"
        )
        return result

    async def add_videos_to_project(
        self,
        session: AsyncSession,
        request: AddVideosToProjectRequest,
        owner_id: str,
    ) -> AddVideosToProjectResponse:
        """
        Add videos to a project, reporting the outcome as a response object.

        Never raises: invalid input, a missing or foreign project, store
        failures and unexpected errors all come back as ``success=False``
        with ``error_code`` set.
        """
        try:
            result = await self.ingest(
                session, request.project_id, owner_id, request.video_ids
            )
        except InvalidInputError as e:
            return AddVideosToProjectResponse(
                success=False, message=e.message, error_code=e.error_code.value
            )
        except NotFoundError as e:
            return AddVideosToProjectResponse(
                success=False,
                message=PROJECT_NOT_FOUND_MESSAGE,
                error_code=e.error_code.value,
            )
        except StoreError as e:
            return AddVideosToProjectResponse(
                success=False,
                message=f"Error adding videos to project: {e.message}",
                video_count=0,
                error_code=e.error_code.value,
            )
        except Exception as e:
            await session.rollback()
            logger.exception(
                f"Unexpected error adding videos to project {request.project_id}"
            )
            return AddVideosToProjectResponse(
                success=False,
                message=f"Error adding videos to project: {type(e).__name__}",
                video_count=0,
                error_code=ErrorCode.INTERNAL_ERROR.value,
            )

        message = f"Successfully added {result.added_count} videos to the project"
        if result.skipped_count:
            message += f" ({result.skipped_count} skipped)"
        return AddVideosToProjectResponse(
            success=True, message=message, video_count=result.added_count
        )

    def _skip(self, result: IngestionResult, video_id: str, reason: SkipReason) -> None:
        logger.warning(f"Skipping video {video_id}: {reason.value}")
        result.skip(video_id, reason)

    async def _fetch_video(self, video_id: str) -> Optional[VideoMetadata]:
        try:
            return await self.catalog.get_video(video_id)
        except YouTubeAPIError as e:
            logger.warning(f"Catalog lookup failed for video {video_id}: {e.message}")
            return None

    def _build_video(
        self,
        metadata: VideoMetadata,
        project_id: uuid.UUID,
        channel_id: uuid.UUID,
        owner_id: str,
    ) -> VideoDB:
        return self.video_repository.build(
            {
                "youtube_id": metadata.video_id,
                "title": metadata.title,
                "description": metadata.description,
                "published_at": metadata.published_at,
                "duration": metadata.duration_seconds,
                "view_count": metadata.view_count,
                "like_count": metadata.like_count,
                "comment_count": metadata.comment_count,
            },
            user_id=owner_id,
            project_id=project_id,
            channel_id=channel_id,
        )

    async def _commit(
        self,
        session: AsyncSession,
        project: ProjectDB,
        resolver: ChannelResolver,
        new_videos: List[VideoDB],
        reattached: List[VideoDB],
        owner_id: str,
    ) -> int:
        """
        Write the batch and commit; returns the channels created.

        Store errors propagate to ``ingest``, which rolls the batch back.
        """
        channels_created = 0
        for channel in resolver.pending_channels:
            try:
                async with session.begin_nested():
                    session.add(channel)
                channels_created += 1
            except IntegrityError:
                # Another batch created the channel after we looked it up
                winner = await self.channel_repository.get_by_youtube_id(
                    session, channel.youtube_id
                )
                if winner is None:
                    raise
                logger.info(
                    f"Channel {channel.youtube_id} was created concurrently; "
                    "reusing existing row"
                )
                for video in new_videos:
                    if video.channel_id == channel.id:
                        video.channel_id = winner.id

        for video in reattached:
            await self.video_repository.attach_to_project(
                session, db_obj=video, project_id=project.id, user_id=owner_id
            )
        session.add_all(new_videos)
        if new_videos or reattached:
            project.touch(owner_id)
        await session.commit()
        return channels_created
