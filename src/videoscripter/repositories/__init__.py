"""
Repository layer for data access patterns.

This module provides repository interfaces and implementations following
the Repository pattern for clean separation of domain logic and data persistence.
All read paths exclude soft-deleted rows through ``active()``.
"""

from .base import BaseRepository, BaseSQLAlchemyRepository, active
from .category_repository import CategoryRepository
from .channel_repository import ChannelRepository
from .project_repository import ProjectRepository
from .script_repository import ScriptRepository
from .transcript_topic_repository import TranscriptTopicRepository
from .video_repository import VideoRepository

__all__ = [
    "BaseRepository",
    "BaseSQLAlchemyRepository",
    "CategoryRepository",
    "ChannelRepository",
    "ProjectRepository",
    "ScriptRepository",
    "TranscriptTopicRepository",
    "VideoRepository",
    "active",
]
