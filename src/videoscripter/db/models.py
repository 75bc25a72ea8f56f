"""
Database models for videoscripter.

Every entity carries the audit columns of ``AuditMixin`` and is soft-deleted
through ``is_deleted``. Relations are plain foreign keys; traversal is always
an explicit query (see ``videoscripter.repositories``), never lazy loading.
"""

from __future__ import annotations

import datetime
import uuid
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    Uuid,
    false,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func
from uuid_utils import uuid7


def new_id() -> uuid.UUID:
    """Time-ordered (v7) surrogate key as a stdlib ``uuid.UUID``."""
    return uuid.UUID(bytes=uuid7().bytes)


def utcnow() -> datetime.datetime:
    """Timezone-aware current time used for audit stamps."""
    return datetime.datetime.now(datetime.timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class AuditMixin:
    """Identity, audit and soft-delete columns shared by every entity."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_id)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    last_modified_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    last_modified_by: Mapped[str] = mapped_column(String(100), nullable=False)

    is_deleted: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    def touch(self, user_id: str) -> None:
        """Stamp the modifier and modification time."""
        self.last_modified_at = utcnow()
        self.last_modified_by = user_id

    def mark_deleted(self, user_id: str) -> None:
        """Soft-delete this row."""
        self.is_deleted = True
        self.touch(user_id)


channel_categories = Table(
    "channel_categories",
    Base.metadata,
    Column("channel_id", Uuid, ForeignKey("channels.id"), primary_key=True),
    Column("category_id", Uuid, ForeignKey("categories.id"), primary_key=True),
    Column(
        "created_at",
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    ),
)


class Project(AuditMixin, Base):
    """User-owned collection of videos and scripts."""

    __tablename__ = "projects"

    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    topic: Mapped[str] = mapped_column(String(500), nullable=False)


class Channel(AuditMixin, Base):
    """YouTube channel owning one or more ingested videos."""

    __tablename__ = "channels"

    youtube_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(500))
    subscriber_count: Mapped[Optional[int]] = mapped_column(BigInteger)
    video_count: Mapped[Optional[int]] = mapped_column(BigInteger)
    published_at: Mapped[Optional[datetime.datetime]] = mapped_column(
        DateTime(timezone=True)
    )


class Video(AuditMixin, Base):
    """Video captured from the catalog with metrics frozen at ingestion time."""

    __tablename__ = "videos"

    youtube_id: Mapped[str] = mapped_column(String(64), nullable=False)

    # Foreign keys
    project_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("projects.id"), index=True
    )
    channel_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("channels.id"), nullable=False, index=True
    )

    # Video metadata
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    published_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    duration: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )  # Duration in seconds
    raw_transcript: Mapped[Optional[str]] = mapped_column(Text)

    # Engagement metrics
    view_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)


class Script(AuditMixin, Base):
    """Script drafted inside a project."""

    __tablename__ = "scripts"

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)


class TranscriptTopic(AuditMixin, Base):
    """Topic segment extracted from a video transcript."""

    __tablename__ = "transcript_topics"

    video_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("videos.id"), nullable=False, index=True
    )
    start_time: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0
    )  # Offset in seconds
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    topic_summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_selected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Category(AuditMixin, Base):
    """Free-standing tag grouping channels."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)


# External ids are unique among live rows only; deleted rows keep their id.
Index(
    "uq_videos_youtube_id_active",
    Video.youtube_id,
    unique=True,
    postgresql_where=Video.is_deleted == false(),
    sqlite_where=Video.is_deleted == false(),
)
Index(
    "uq_channels_youtube_id_active",
    Channel.youtube_id,
    unique=True,
    postgresql_where=Channel.is_deleted == false(),
    sqlite_where=Channel.is_deleted == false(),
)
