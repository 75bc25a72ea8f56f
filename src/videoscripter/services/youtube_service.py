"""
YouTube Data API service for catalog lookups.

Provides search, video and channel lookups against YouTube Data API v3 using
an API key. The google client is blocking, so every request is executed in a
worker thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import ValidationError

from videoscripter.config.settings import settings
from videoscripter.exceptions import YouTubeAPIError
from videoscripter.models.catalog import ChannelMetadata, VideoMetadata
from videoscripter.services.interfaces import CatalogServiceInterface
from videoscripter.utils.duration import parse_iso8601_duration

logger = logging.getLogger(__name__)

VIDEO_PARTS = "id,snippet,statistics,contentDetails"
CHANNEL_PARTS = "id,snippet,statistics"
MAX_RESULTS_LIMIT = 50

# Failures below HTTP: DNS, refused connections, socket timeouts
TRANSPORT_ERRORS = (httplib2.HttpLib2Error, TimeoutError, OSError)

T = TypeVar("T")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp as returned by the API."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Could not parse timestamp: {value}")
        return None


def _thumbnail_url(snippet: Dict[str, Any]) -> Optional[str]:
    thumbnails = snippet.get("thumbnails") or {}
    for size in ("high", "medium", "default"):
        if size in thumbnails:
            return thumbnails[size].get("url")
    return None


def _int(stats: Dict[str, Any], key: str) -> int:
    # Statistics arrive as strings and are omitted when hidden
    try:
        return int(stats.get(key, 0))
    except (TypeError, ValueError):
        return 0


def _error_reason(error: HttpError) -> Optional[str]:
    try:
        content = json.loads(error.content.decode("utf-8"))
        errors = content.get("error", {}).get("errors", [])
        return errors[0].get("reason") if errors else None
    except (ValueError, AttributeError, UnicodeDecodeError):
        return None


def video_from_item(item: Dict[str, Any]) -> VideoMetadata:
    """
    Map a ``videos.list`` item to ``VideoMetadata``.

    Parameters
    ----------
    item : Dict[str, Any]
        Raw API resource with snippet, statistics and contentDetails parts.

    Returns
    -------
    VideoMetadata
        Typed record; missing statistics become 0 and the ISO 8601 duration
        is converted to whole seconds.
    """
    snippet = item.get("snippet", {})
    stats = item.get("statistics", {})
    details = item.get("contentDetails", {})
    return VideoMetadata(
        video_id=item["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        thumbnail_url=_thumbnail_url(snippet),
        channel_id=snippet["channelId"],
        channel_title=snippet.get("channelTitle", ""),
        published_at=_parse_timestamp(snippet.get("publishedAt"))
        or datetime.now(timezone.utc),
        view_count=_int(stats, "viewCount"),
        like_count=_int(stats, "likeCount"),
        comment_count=_int(stats, "commentCount"),
        duration_seconds=parse_iso8601_duration(details.get("duration")),
    )


def channel_from_item(item: Dict[str, Any]) -> ChannelMetadata:
    """Map a ``channels.list`` item to ``ChannelMetadata``."""
    snippet = item.get("snippet", {})
    stats = item.get("statistics", {})
    return ChannelMetadata(
        channel_id=item["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        thumbnail_url=_thumbnail_url(snippet),
        subscriber_count=None
        if stats.get("hiddenSubscriberCount")
        else _int(stats, "subscriberCount"),
        video_count=_int(stats, "videoCount"),
        published_at=_parse_timestamp(snippet.get("publishedAt")),
    )


class YouTubeService(CatalogServiceInterface):
    """
    YouTube Data API catalog service.

    Provides methods for searching and resolving videos and channels using an
    API-key client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        application_name: Optional[str] = None,
        video_duration: Optional[str] = None,
        service: Any = None,
    ) -> None:
        """
        Initialize YouTube service.

        Parameters
        ----------
        api_key : Optional[str]
            Data API key (default: ``settings.youtube_api_key``)
        application_name : Optional[str]
            Name reported in log lines (default: ``settings.youtube_application_name``)
        video_duration : Optional[str]
            Search duration filter (default: ``settings.search_video_duration``)
        service : Any
            Pre-built client resource, used by tests
        """
        self._api_key = api_key if api_key is not None else settings.youtube_api_key
        self.application_name = (
            application_name or settings.youtube_application_name
        )
        self.video_duration = video_duration or settings.search_video_duration
        self._service = service

    @property
    def service(self) -> Any:
        """Get the YouTube API client, building it on first use."""
        if self._service is None:
            if not self._api_key:
                raise YouTubeAPIError("YouTube API key is not configured")
            self._service = build(
                "youtube", "v3", developerKey=self._api_key, cache_discovery=False
            )
        return self._service

    async def _execute(self, request: Any, operation: str) -> Dict[str, Any]:
        """
        Run a prepared request in a worker thread.

        HTTP errors and transport failures are both raised as
        ``YouTubeAPIError`` so callers handle a single exception type.
        """
        try:
            response = await asyncio.to_thread(request.execute)
        except HttpError as e:
            status = e.resp.status if e.resp else None
            reason = _error_reason(e)
            logger.error(
                f"[{self.application_name}] YouTube API error during {operation} "
                f"(HTTP {status}, reason={reason})"
            )
            raise YouTubeAPIError(
                f"YouTube API error during {operation}",
                status_code_upstream=status,
                error_reason=reason,
            ) from e
        except TRANSPORT_ERRORS as e:
            logger.error(
                f"[{self.application_name}] YouTube API unreachable during "
                f"{operation}: {type(e).__name__}: {e}"
            )
            raise YouTubeAPIError(
                f"YouTube API unreachable during {operation}: {type(e).__name__}",
                error_reason=type(e).__name__,
            ) from e
        return dict(response)

    def _map_item(
        self, mapper: Callable[[Dict[str, Any]], T], item: Dict[str, Any], operation: str
    ) -> T:
        """Map a raw API item, treating a malformed item as an API error."""
        try:
            return mapper(item)
        except (KeyError, TypeError, ValidationError) as e:
            logger.error(
                f"[{self.application_name}] Malformed item in {operation} "
                f"response: {type(e).__name__}: {e}"
            )
            raise YouTubeAPIError(
                f"Malformed YouTube API response during {operation}",
                error_reason="malformedResponse",
            ) from e

    async def search(self, query: str, max_results: int = 25) -> List[VideoMetadata]:
        """
        Search for videos and return them with full statistics.

        Parameters
        ----------
        query : str
            Free-text search term
        max_results : int
            Maximum number of videos (default 25, capped at 50)

        Returns
        -------
        List[VideoMetadata]
            Videos in relevance order
        """
        max_results = max(1, min(max_results, MAX_RESULTS_LIMIT))
        request = self.service.search().list(
            part="id",
            q=query,
            type="video",
            maxResults=max_results,
            videoDuration=self.video_duration,
            order="relevance",
        )
        response = await self._execute(request, "search")

        video_ids = [
            item["id"]["videoId"]
            for item in response.get("items", [])
            if item.get("id", {}).get("videoId")
        ]
        if not video_ids:
            return []

        # search.list carries no statistics; fetch them in one videos.list call
        request = self.service.videos().list(part=VIDEO_PARTS, id=",".join(video_ids))
        details = await self._execute(request, "search details")
        by_id = {item.get("id"): item for item in details.get("items", [])}

        return [
            self._map_item(video_from_item, by_id[vid], "search")
            for vid in video_ids
            if vid in by_id
        ]

    async def get_video(self, video_id: str) -> Optional[VideoMetadata]:
        """
        Get full metadata for one video.

        Parameters
        ----------
        video_id : str
            YouTube video ID

        Returns
        -------
        Optional[VideoMetadata]
            The video, or None if YouTube does not know it
        """
        request = self.service.videos().list(part=VIDEO_PARTS, id=video_id)
        response = await self._execute(request, "get_video")

        items = response.get("items", [])
        if not items:
            logger.info(f"Video {video_id} not found in catalog")
            return None
        return self._map_item(video_from_item, items[0], "get_video")

    async def get_channel(self, channel_id: str) -> Optional[ChannelMetadata]:
        """Get full metadata for one channel, or None if it does not exist."""
        request = self.service.channels().list(part=CHANNEL_PARTS, id=channel_id)
        response = await self._execute(request, "get_channel")

        items = response.get("items", [])
        if not items:
            logger.info(f"Channel {channel_id} not found in catalog")
            return None
        return self._map_item(channel_from_item, items[0], "get_channel")
