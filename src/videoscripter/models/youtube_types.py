"""
Custom validated types for YouTube identifiers and caller identity.

Provides annotated string types that enforce basic format constraints at the
model boundary, so malformed input is rejected before any store access.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import BeforeValidator

_YOUTUBE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
MAX_YOUTUBE_ID_LENGTH = 64


def validate_video_id(v: str) -> str:
    """Validate YouTube Video ID format."""
    if not isinstance(v, str):
        raise TypeError("VideoId must be a string")

    v = v.strip()
    if not v:
        raise ValueError("VideoId cannot be empty")

    if len(v) > MAX_YOUTUBE_ID_LENGTH:
        raise ValueError(
            f"VideoId must be at most {MAX_YOUTUBE_ID_LENGTH} characters, got {len(v)}"
        )

    # Check valid characters (alphanumeric, hyphens, underscores)
    if not _YOUTUBE_ID_PATTERN.match(v):
        raise ValueError(f"VideoId contains invalid characters: {v}")

    return v


def validate_channel_id(v: str) -> str:
    """Validate YouTube Channel ID format."""
    if not isinstance(v, str):
        raise TypeError("ChannelId must be a string")

    v = v.strip()
    if not v:
        raise ValueError("ChannelId cannot be empty")

    if len(v) > MAX_YOUTUBE_ID_LENGTH:
        raise ValueError(
            f"ChannelId must be at most {MAX_YOUTUBE_ID_LENGTH} characters, got {len(v)}"
        )

    if not _YOUTUBE_ID_PATTERN.match(v):
        raise ValueError(f"ChannelId contains invalid characters: {v}")

    return v


def validate_user_id(v: str) -> str:
    """Validate User ID format."""
    if not isinstance(v, str):
        raise TypeError("User ID must be a string")

    v = v.strip()
    if not v:
        raise ValueError("User ID cannot be empty")

    if len(v) > 100:
        raise ValueError(f"User ID must be at most 100 characters, got {len(v)}")

    return v


VideoId = Annotated[str, BeforeValidator(validate_video_id)]
ChannelId = Annotated[str, BeforeValidator(validate_channel_id)]
