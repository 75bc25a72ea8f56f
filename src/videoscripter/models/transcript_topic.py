"""
Transcript topic models.
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field


class TranscriptTopicCreate(BaseModel):
    """Model for creating transcript topics."""

    video_id: uuid.UUID
    start_time: float = Field(default=0.0, ge=0.0, description="Offset in seconds")
    content: str = ""
    topic_summary: str = ""
    is_selected: bool = False


class TranscriptTopicModel(TranscriptTopicCreate):
    """Read projection of a transcript topic."""

    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
