"""
Category models.
"""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Model for creating categories."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryModel(CategoryCreate):
    """Read projection of a category."""

    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
