"""
Data models module for videoscripter.

Defines Pydantic models for catalog metadata, projects, videos, scripts and
ingestion results with full type safety and validation.
"""

from __future__ import annotations

from .catalog import ChannelMetadata, VideoMetadata, format_duration
from .category import CategoryCreate, CategoryModel
from .enums import SkipReason
from .ingestion import IngestionResult, SkippedVideo
from .project import ProjectBase, ProjectCreate, ProjectModel, ProjectUpdate
from .script import ScriptCreate, ScriptModel, ScriptUpdate
from .transcript_topic import TranscriptTopicCreate, TranscriptTopicModel
from .video import (
    AddVideosToProjectRequest,
    AddVideosToProjectResponse,
    ProjectVideo,
)
from .youtube_types import ChannelId, VideoId

__all__ = [
    "AddVideosToProjectRequest",
    "AddVideosToProjectResponse",
    "CategoryCreate",
    "CategoryModel",
    "ChannelId",
    "ChannelMetadata",
    "IngestionResult",
    "ProjectBase",
    "ProjectCreate",
    "ProjectModel",
    "ProjectUpdate",
    "ProjectVideo",
    "ScriptCreate",
    "ScriptModel",
    "ScriptUpdate",
    "SkipReason",
    "SkippedVideo",
    "TranscriptTopicCreate",
    "TranscriptTopicModel",
    "VideoId",
    "VideoMetadata",
    "format_duration",
]
