"""
Enums for videoscripter models.

Defines enumeration types used across the application for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class SkipReason(str, Enum):
    """Why an identifier in an ingestion batch did not produce a new video."""

    DUPLICATE_IN_PROJECT = "duplicate_in_project"
    ATTACHED_TO_OTHER_PROJECT = "attached_to_other_project"
    UNRESOLVABLE = "unresolvable"
    CHANNEL_UNRESOLVABLE = "channel_unresolvable"
    OWNED_BY_OTHER_USER = "owned_by_other_user"
