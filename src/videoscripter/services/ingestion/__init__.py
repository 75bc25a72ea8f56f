"""
Ingestion pipeline: adds catalog videos to projects with batch-level
deduplication of videos and channels.
"""

from .channel_resolver import ChannelResolver
from .ingestion_service import IngestionService

__all__ = ["ChannelResolver", "IngestionService"]
