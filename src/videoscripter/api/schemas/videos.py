"""Request bodies for video endpoints."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class AddVideosBody(BaseModel):
    """Body of ``POST /projects/{project_id}/videos``."""

    model_config = ConfigDict(populate_by_name=True)

    video_ids: List[str] = Field(default_factory=list, alias="videoIds")
