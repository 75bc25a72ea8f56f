"""
Abstract Base Class for the external video catalog.

Ingestion and search only ever talk to this interface, so tests substitute an
``AsyncMock`` and production uses the YouTube Data API implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from ...models.catalog import ChannelMetadata, VideoMetadata


class CatalogServiceInterface(ABC):
    """
    Abstract interface for catalog lookups.

    Implementations return ``None`` for identifiers the catalog does not
    know and raise ``YouTubeAPIError`` for transport or quota failures. Each
    call is a single attempt; callers decide how to recover.

    Examples
    --------
    >>> class EmptyCatalog(CatalogServiceInterface):
    ...     async def get_video(self, video_id: str) -> Optional[VideoMetadata]:
    ...         return None
    """

    @abstractmethod
    async def search(self, query: str, max_results: int = 25) -> List[VideoMetadata]:
        """
        Search the catalog for videos.

        Parameters
        ----------
        query : str
            Free-text search term.
        max_results : int, optional
            Maximum number of results (default: 25, max: 50).

        Returns
        -------
        List[VideoMetadata]
            Matching videos in relevance order.
        """
        pass

    @abstractmethod
    async def get_video(self, video_id: str) -> Optional[VideoMetadata]:
        """
        Resolve one video identifier to full metadata.

        Returns
        -------
        Optional[VideoMetadata]
            The video, or None when the catalog has no such video.
        """
        pass

    @abstractmethod
    async def get_channel(self, channel_id: str) -> Optional[ChannelMetadata]:
        """
        Resolve one channel identifier to full metadata.

        Returns
        -------
        Optional[ChannelMetadata]
            The channel, or None when the catalog has no such channel.
        """
        pass
