"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-09-28 10:12:41.302117

"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns() -> list[sa.Column]:
    """Audit and soft-delete columns carried by every entity table."""
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "last_modified_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("last_modified_by", sa.String(100), nullable=False),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "projects",
        *_audit_columns(),
        sa.Column("user_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("topic", sa.String(500), nullable=False),
    )
    op.create_index("ix_projects_user_id", "projects", ["user_id"])

    op.create_table(
        "channels",
        *_audit_columns(),
        sa.Column("youtube_id", sa.String(64), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("thumbnail_url", sa.String(500), nullable=True),
        sa.Column("subscriber_count", sa.BigInteger(), nullable=True),
        sa.Column("video_count", sa.BigInteger(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "uq_channels_youtube_id_active",
        "channels",
        ["youtube_id"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )

    op.create_table(
        "videos",
        *_audit_columns(),
        sa.Column("youtube_id", sa.String(64), nullable=False),
        sa.Column(
            "project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=True
        ),
        sa.Column(
            "channel_id", sa.Uuid(), sa.ForeignKey("channels.id"), nullable=False
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("raw_transcript", sa.Text(), nullable=True),
        sa.Column("view_count", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column(
            "comment_count", sa.BigInteger(), nullable=False, server_default="0"
        ),
    )
    op.create_index("ix_videos_project_id", "videos", ["project_id"])
    op.create_index("ix_videos_channel_id", "videos", ["channel_id"])
    op.create_index(
        "uq_videos_youtube_id_active",
        "videos",
        ["youtube_id"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )

    op.create_table(
        "scripts",
        *_audit_columns(),
        sa.Column(
            "project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=False
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_scripts_project_id", "scripts", ["project_id"])

    op.create_table(
        "transcript_topics",
        *_audit_columns(),
        sa.Column(
            "video_id", sa.Uuid(), sa.ForeignKey("videos.id"), nullable=False
        ),
        sa.Column("start_time", sa.Float(), nullable=False, server_default="0"),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("topic_summary", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "is_selected", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
    )
    op.create_index(
        "ix_transcript_topics_video_id", "transcript_topics", ["video_id"]
    )

    op.create_table(
        "categories",
        *_audit_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )

    op.create_table(
        "channel_categories",
        sa.Column(
            "channel_id",
            sa.Uuid(),
            sa.ForeignKey("channels.id"),
            primary_key=True,
        ),
        sa.Column(
            "category_id",
            sa.Uuid(),
            sa.ForeignKey("categories.id"),
            primary_key=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=True,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("channel_categories")
    op.drop_table("categories")
    op.drop_index("ix_transcript_topics_video_id", table_name="transcript_topics")
    op.drop_table("transcript_topics")
    op.drop_index("ix_scripts_project_id", table_name="scripts")
    op.drop_table("scripts")
    op.drop_index("uq_videos_youtube_id_active", table_name="videos")
    op.drop_index("ix_videos_channel_id", table_name="videos")
    op.drop_index("ix_videos_project_id", table_name="videos")
    op.drop_table("videos")
    op.drop_index("uq_channels_youtube_id_active", table_name="channels")
    op.drop_table("channels")
    op.drop_index("ix_projects_user_id", table_name="projects")
    op.drop_table("projects")
