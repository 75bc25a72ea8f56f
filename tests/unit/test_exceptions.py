"""
Tests for the videoscripter exception hierarchy.
"""

import pytest

from videoscripter.api.schemas.responses import ErrorCode
from videoscripter.exceptions import (
    ChannelInUseError,
    ChannelResolutionError,
    ConflictError,
    ExternalResolutionError,
    InvalidInputError,
    NotFoundError,
    StoreError,
    VideoScripterError,
    YouTubeAPIError,
)


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error,status,code",
        [
            (NotFoundError("Project", "p1"), 404, ErrorCode.NOT_FOUND),
            (InvalidInputError("bad"), 422, ErrorCode.VALIDATION_ERROR),
            (StoreError(), 500, ErrorCode.DATABASE_ERROR),
            (ConflictError("taken"), 409, ErrorCode.CONFLICT),
            (YouTubeAPIError(), 502, ErrorCode.EXTERNAL_SERVICE_ERROR),
        ],
    )
    def test_status_and_code(self, error, status, code) -> None:
        assert isinstance(error, VideoScripterError)
        assert error.status_code == status
        assert error.error_code == code


class TestNotFoundError:
    def test_message_and_details(self) -> None:
        error = NotFoundError("Project", "p1", hint="Check the id")
        assert error.message == "Project 'p1' not found. Check the id"
        assert error.details == {"resource_type": "Project", "identifier": "p1"}

    def test_to_api_error(self) -> None:
        api_error = NotFoundError("Video", "abc").to_api_error()
        assert api_error.code == "NOT_FOUND"
        assert api_error.message == "Video 'abc' not found"


class TestInvalidInputError:
    def test_field_in_details(self) -> None:
        error = InvalidInputError("empty", field_name="video_ids", invalid_value="")
        assert error.details == {"field": "video_ids"}
        assert error.invalid_value == ""

    def test_no_details_without_field(self) -> None:
        assert InvalidInputError().details is None


class TestStoreError:
    def test_keeps_original_error(self) -> None:
        cause = RuntimeError("disk full")
        error = StoreError("failed", operation="ingest", original_error=cause)
        assert error.operation == "ingest"
        assert error.original_error is cause


class TestChannelErrors:
    def test_channel_in_use_is_conflict(self) -> None:
        error = ChannelInUseError("UCabc", 3)
        assert isinstance(error, ConflictError)
        assert error.status_code == 409
        assert error.details == {"channel_id": "UCabc", "video_count": 3}

    def test_channel_resolution_error(self) -> None:
        error = ChannelResolutionError("UCabc")
        assert isinstance(error, ExternalResolutionError)
        assert error.youtube_id == "UCabc"
        assert error.message == "Channel 'UCabc' not found in catalog"

    def test_youtube_api_error_fields(self) -> None:
        error = YouTubeAPIError(
            "quota", status_code_upstream=403, error_reason="quotaExceeded"
        )
        assert error.status_code_upstream == 403
        assert error.error_reason == "quotaExceeded"
