"""
Project models.

Defines Pydantic models for creating, editing and viewing projects.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectBase(BaseModel):
    """Base model for project data."""

    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    topic: str = Field(..., min_length=1, max_length=500, description="Project topic")

    @field_validator("name", "topic")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class ProjectCreate(ProjectBase):
    """Model for creating projects."""

    pass


class ProjectUpdate(ProjectBase):
    """Model for renaming or re-topicing a project."""

    id: uuid.UUID = Field(..., description="Project to update")


class ProjectModel(BaseModel):
    """Read projection of a project with live child counts."""

    id: uuid.UUID
    name: str
    topic: str
    created_at: datetime
    last_modified_at: datetime
    video_count: int = 0
    script_count: int = 0

    model_config = ConfigDict(from_attributes=True)
