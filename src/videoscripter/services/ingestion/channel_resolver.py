"""
Channel resolution for one ingestion batch.

Resolves external channel ids to internal ids, consulting in turn a run-local
cache, the store and the catalog. Channels found only in the catalog are
built but not flushed; the ingestion service writes them at commit time.
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Channel as ChannelDB
from videoscripter.db.models import new_id
from videoscripter.exceptions import ChannelResolutionError, YouTubeAPIError
from videoscripter.models.catalog import ChannelMetadata
from videoscripter.repositories.channel_repository import ChannelRepository
from videoscripter.services.interfaces import CatalogServiceInterface

logger = logging.getLogger(__name__)

UNKNOWN_CHANNEL_TITLE = "Unknown Channel"


class ChannelResolver:
    """
    Per-batch channel resolver.

    One instance serves exactly one ingestion batch. It guarantees that at
    most one new ``Channel`` row is built per distinct external channel id.

    Parameters
    ----------
    session : AsyncSession
        Session of the ingestion batch
    catalog : CatalogServiceInterface
        Catalog used for channels the store does not know
    channel_repo : ChannelRepository
        Store access for channels
    user_id : str
        User stamped on new channel rows
    """

    def __init__(
        self,
        session: AsyncSession,
        catalog: CatalogServiceInterface,
        channel_repo: ChannelRepository,
        user_id: str,
    ) -> None:
        self.session = session
        self.catalog = catalog
        self.channel_repo = channel_repo
        self.user_id = user_id
        self._cache: Dict[str, uuid.UUID] = {}
        self._pending: Dict[str, ChannelDB] = {}

    @property
    def pending_channels(self) -> List[ChannelDB]:
        """New channel rows built during this batch, in creation order."""
        return list(self._pending.values())

    def build_channel(self, metadata: ChannelMetadata) -> ChannelDB:
        """Build an unsaved channel row from catalog metadata."""
        return self.channel_repo.build(
            {
                "youtube_id": metadata.channel_id,
                "title": metadata.title.strip() or UNKNOWN_CHANNEL_TITLE,
                "description": metadata.description,
                "thumbnail_url": metadata.thumbnail_url,
                "subscriber_count": metadata.subscriber_count,
                "video_count": metadata.video_count,
                "published_at": metadata.published_at,
            },
            user_id=self.user_id,
            id=new_id(),
        )

    async def resolve(self, youtube_channel_id: str) -> uuid.UUID:
        """
        Resolve an external channel id to an internal channel id.

        Parameters
        ----------
        youtube_channel_id : str
            YouTube channel ID referenced by a video

        Returns
        -------
        uuid.UUID
            Id of an existing live channel or of a pending new one

        Raises
        ------
        ChannelResolutionError
            If the catalog does not know the channel or the lookup fails
        """
        cached = self._cache.get(youtube_channel_id)
        if cached is not None:
            return cached

        existing = await self.channel_repo.get_by_youtube_id(
            self.session, youtube_channel_id
        )
        if existing is not None:
            self._cache[youtube_channel_id] = existing.id
            return existing.id

        try:
            metadata = await self.catalog.get_channel(youtube_channel_id)
        except YouTubeAPIError as e:
            raise ChannelResolutionError(
                youtube_channel_id, reason=f"lookup failed: {e.message}"
            ) from e
        if metadata is None:
            raise ChannelResolutionError(youtube_channel_id)

        channel = self.build_channel(metadata)
        self._cache[youtube_channel_id] = channel.id
        self._pending[youtube_channel_id] = channel
        logger.debug(f"Channel {youtube_channel_id} queued for creation")
        return channel.id
