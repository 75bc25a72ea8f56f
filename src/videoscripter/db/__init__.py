"""
Database module for videoscripter.

Contains SQLAlchemy models and Alembic migration management for the
project, video, channel and script store.
"""

from __future__ import annotations

from videoscripter.db.models import (
    AuditMixin,
    Base,
    Category,
    Channel,
    Project,
    Script,
    TranscriptTopic,
    Video,
    channel_categories,
)

__all__: list[str] = [
    "AuditMixin",
    "Base",
    "Category",
    "Channel",
    "Project",
    "Script",
    "TranscriptTopic",
    "Video",
    "channel_categories",
]
