"""
Catalog metadata models.

Typed records returned by the catalog client (YouTube Data API) for videos
and channels. Counts are captured as of the moment of the call.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .youtube_types import ChannelId, VideoId


def format_duration(seconds: int) -> str:
    """
    Format a duration in seconds as ``H:MM:SS`` or ``M:SS``.

    Examples
    --------
    >>> format_duration(5415)
    '1:30:15'
    >>> format_duration(303)
    '5:03'
    """
    hours, remainder = divmod(max(seconds, 0), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class VideoMetadata(BaseModel):
    """Video record as resolved from the catalog."""

    video_id: VideoId = Field(..., description="YouTube video ID")
    title: str = Field(..., description="Video title")
    description: str = Field(default="", description="Video description")
    thumbnail_url: Optional[str] = Field(default=None, description="Thumbnail URL")
    channel_id: ChannelId = Field(..., description="Owning channel's YouTube ID")
    channel_title: str = Field(default="", description="Owning channel's title")
    published_at: datetime = Field(..., description="Publish time")
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    duration_seconds: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_duration(self) -> str:
        """Human-readable duration."""
        return format_duration(self.duration_seconds)

    model_config = ConfigDict(frozen=True)


class ChannelMetadata(BaseModel):
    """Channel record as resolved from the catalog."""

    channel_id: ChannelId = Field(..., description="YouTube channel ID")
    title: str = Field(..., description="Channel title")
    description: str = Field(default="")
    thumbnail_url: Optional[str] = Field(default=None)
    subscriber_count: Optional[int] = Field(default=None, ge=0)
    video_count: Optional[int] = Field(default=None, ge=0)
    published_at: Optional[datetime] = Field(default=None)

    model_config = ConfigDict(frozen=True)
