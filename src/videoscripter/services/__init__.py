"""
Services module for videoscripter.

Contains the business logic: catalog access, the ingestion pipeline and the
project, video and script services.
"""

from __future__ import annotations

from videoscripter.services.ingestion import ChannelResolver, IngestionService
from videoscripter.services.project_service import ProjectService
from videoscripter.services.script_service import ScriptService
from videoscripter.services.video_service import VideoService
from videoscripter.services.youtube_service import YouTubeService

__all__: list[str] = [
    "ChannelResolver",
    "IngestionService",
    "ProjectService",
    "ScriptService",
    "VideoService",
    "YouTubeService",
]
