"""
Video models.

Request/response models for adding videos to projects and the read
projection of a project's videos.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .catalog import format_duration


class ProjectVideo(BaseModel):
    """A stored video joined with its channel, as listed inside a project."""

    id: uuid.UUID = Field(..., description="Internal video ID")
    youtube_id: str = Field(..., description="YouTube video ID")
    title: str
    description: Optional[str] = None
    channel_youtube_id: str
    channel_title: str = "Unknown Channel"
    published_at: datetime
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration_seconds: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def formatted_duration(self) -> str:
        """Human-readable duration."""
        return format_duration(self.duration_seconds)


class AddVideosToProjectRequest(BaseModel):
    """Request model for adding videos to a project."""

    project_id: uuid.UUID = Field(..., alias="projectId")
    video_ids: List[str] = Field(default_factory=list, alias="videoIds")

    model_config = ConfigDict(populate_by_name=True)


class AddVideosToProjectResponse(BaseModel):
    """Response model for adding videos to a project."""

    success: bool
    message: str = ""
    video_count: int = Field(default=0, alias="videoCount")

    # Error classification for the transport layer; never serialized
    error_code: Optional[str] = Field(default=None, exclude=True)

    model_config = ConfigDict(populate_by_name=True)
