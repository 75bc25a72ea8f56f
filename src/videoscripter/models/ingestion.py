"""
Ingestion result models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .enums import SkipReason


class SkippedVideo(BaseModel):
    """An identifier that was skipped during ingestion, with the reason."""

    video_id: str
    reason: SkipReason


class IngestionResult(BaseModel):
    """Outcome of one ingestion batch."""

    added_count: int = 0
    reattached_count: int = 0
    channels_created: int = 0
    skipped: list[SkippedVideo] = Field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        """Number of identifiers that did not produce a video."""
        return len(self.skipped)

    @property
    def total_processed(self) -> int:
        """Total identifiers processed."""
        return self.added_count + self.skipped_count

    def skipped_for(self, reason: SkipReason) -> list[str]:
        """Identifiers skipped for the given reason, in input order."""
        return [item.video_id for item in self.skipped if item.reason == reason]

    def skip(self, video_id: str, reason: SkipReason) -> None:
        """Record a skipped identifier."""
        self.skipped.append(SkippedVideo(video_id=video_id, reason=reason))
