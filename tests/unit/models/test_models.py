"""
Tests for the Pydantic models.
"""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from videoscripter.models import (
    AddVideosToProjectRequest,
    AddVideosToProjectResponse,
    IngestionResult,
    ProjectCreate,
    ProjectVideo,
    ScriptUpdate,
    SkipReason,
)
from tests.factories.catalog_factory import VideoMetadataFactory


class TestProjectCreate:
    def test_strips_whitespace(self) -> None:
        project = ProjectCreate(name="  Coffee ", topic=" Espresso ")
        assert project.name == "Coffee"
        assert project.topic == "Espresso"

    @pytest.mark.parametrize("field", ["name", "topic"])
    def test_rejects_blank(self, field: str) -> None:
        data = {"name": "Coffee", "topic": "Espresso", field: "   "}
        with pytest.raises(ValidationError):
            ProjectCreate(**data)


class TestScriptUpdate:
    def test_unset_fields_are_not_dumped(self) -> None:
        update = ScriptUpdate(content="New body")
        assert update.model_dump(exclude_unset=True) == {"content": "New body"}

    def test_rejects_blank_title(self) -> None:
        with pytest.raises(ValidationError):
            ScriptUpdate(title="  ")


class TestVideoMetadata:
    def test_formatted_duration(self) -> None:
        video = VideoMetadataFactory(duration_seconds=5415)
        assert video.formatted_duration == "1:30:15"

    def test_rejects_invalid_video_id(self) -> None:
        with pytest.raises(ValidationError):
            VideoMetadataFactory(video_id="not a valid id!")

    def test_rejects_negative_counts(self) -> None:
        with pytest.raises(ValidationError):
            VideoMetadataFactory(view_count=-1)

    def test_is_frozen(self) -> None:
        video = VideoMetadataFactory()
        with pytest.raises(ValidationError):
            video.title = "changed"  # type: ignore[misc]


class TestProjectVideo:
    def test_default_channel_title(self) -> None:
        video = ProjectVideo(
            id=uuid.uuid4(),
            youtube_id="dQw4w9WgXcQ",
            title="Video",
            channel_youtube_id="UCuAXFkgsw1L7xaCfnd5JJOw",
            published_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            duration_seconds=303,
        )
        assert video.channel_title == "Unknown Channel"
        assert video.model_dump()["formatted_duration"] == "5:03"


class TestAddVideos:
    def test_request_accepts_aliases(self) -> None:
        project_id = uuid.uuid4()
        request = AddVideosToProjectRequest.model_validate(
            {"projectId": str(project_id), "videoIds": ["abc"]}
        )
        assert request.project_id == project_id
        assert request.video_ids == ["abc"]

    def test_response_serializes_camel_case_without_error_code(self) -> None:
        response = AddVideosToProjectResponse(
            success=False, message="nope", error_code="NOT_FOUND"
        )
        assert response.model_dump(by_alias=True) == {
            "success": False,
            "message": "nope",
            "videoCount": 0,
        }


class TestIngestionResult:
    def test_skip_bookkeeping(self) -> None:
        result = IngestionResult(added_count=2)
        result.skip("a", SkipReason.UNRESOLVABLE)
        result.skip("b", SkipReason.DUPLICATE_IN_PROJECT)
        result.skip("c", SkipReason.UNRESOLVABLE)

        assert result.skipped_count == 3
        assert result.total_processed == 5
        assert result.skipped_for(SkipReason.UNRESOLVABLE) == ["a", "c"]
