"""
Script models.

Defines Pydantic models for scripts drafted inside a project.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScriptCreate(BaseModel):
    """Model for creating scripts."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(default="")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title is not empty."""
        if not v or not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class ScriptUpdate(BaseModel):
    """Model for editing scripts; unset fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """Validate title if provided."""
        if v is not None and (not v or not v.strip()):
            raise ValueError("Title cannot be empty")
        return v.strip() if v else v


class ScriptModel(BaseModel):
    """Read projection of a script."""

    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    content: str
    version: int
    created_at: datetime
    last_modified_at: datetime

    model_config = ConfigDict(from_attributes=True)
