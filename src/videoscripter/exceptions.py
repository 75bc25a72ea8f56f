"""
Custom exceptions for the videoscripter application.

This module defines the domain-specific exceptions raised by the store,
the catalog client and the services. Every exception carries an HTTP status
and a machine-readable error code so that the API layer can translate it
without knowing the concrete type.
"""

from __future__ import annotations

from typing import Any

from videoscripter.api.schemas.responses import ApiError, ErrorCode


class VideoScripterError(Exception):
    """Base exception for all videoscripter errors."""

    status_code: int = 500
    _error_code_value: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize VideoScripterError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        details : dict[str, Any] | None, optional
            Additional error context (default: None).
        """
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def error_code(self) -> ErrorCode:
        """Get the error code as an ErrorCode enum."""
        return ErrorCode(self._error_code_value)

    def to_api_error(self) -> ApiError:
        """Convert to API response schema.

        Returns
        -------
        ApiError
            Pydantic model suitable for JSON serialization.
        """
        return ApiError(
            code=self.error_code.value,
            message=self.message,
            details=self.details,
        )


class NotFoundError(VideoScripterError):
    """Resource not found (404).

    Raised both when a resource does not exist and when it belongs to another
    user or is soft-deleted. The two cases are deliberately indistinguishable.

    Attributes
    ----------
    resource_type : str
        The type of resource that was not found (e.g., "Project", "Video").
    identifier : str
        The identifier used to look up the resource.

    Examples
    --------
    >>> raise NotFoundError(resource_type="Project", identifier=str(project_id))
    """

    status_code: int = 404
    _error_code_value: str = "NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        hint: str | None = None,
    ) -> None:
        """
        Initialize NotFoundError.

        Parameters
        ----------
        resource_type : str
            The type of resource that was not found.
        identifier : str
            The identifier used to look up the resource.
        hint : str | None, optional
            Additional hint for the user (default: None).
        """
        self.resource_type = resource_type
        self.identifier = identifier
        message = f"{resource_type} '{identifier}' not found"
        if hint:
            message += f". {hint}"
        super().__init__(
            message=message,
            details={"resource_type": resource_type, "identifier": identifier},
        )


class InvalidInputError(VideoScripterError):
    """
    Exception raised for malformed input (422).

    Raised before any store access, e.g. for an empty id list or a blank
    required field.

    Attributes
    ----------
    field_name : str | None
        The name of the field that failed validation.
    invalid_value : object
        The value that failed validation.
    """

    status_code: int = 422
    _error_code_value: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        field_name: str | None = None,
        invalid_value: object = None,
    ) -> None:
        self.field_name: str | None = field_name
        self.invalid_value: object = invalid_value
        details = {"field": field_name} if field_name else None
        super().__init__(message, details=details)


class StoreError(VideoScripterError):
    """
    Exception raised when a store transaction fails (500).

    The failed operation has been rolled back; nothing it attempted is
    persisted.

    Attributes
    ----------
    operation : str | None
        The database operation that failed (e.g., "ingest", "delete").
    entity_type : str | None
        The type of entity involved (e.g., "Video", "Channel").
    original_error : Exception | None
        The original database exception that caused this error.

    Examples
    --------
    >>> try:
    ...     await ingestion_service.ingest(session, project_id, user_id, ids)
    ... except StoreError as e:
    ...     print(f"Failed to {e.operation} {e.entity_type}: {e.message}")
    """

    _error_code_value: str = "DATABASE_ERROR"

    def __init__(
        self,
        message: str = "Store operation failed",
        operation: str | None = None,
        entity_type: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.operation: str | None = operation
        self.entity_type: str | None = entity_type
        self.original_error: Exception | None = original_error
        super().__init__(message)


class ConflictError(VideoScripterError):
    """Resource conflict (409)."""

    status_code: int = 409
    _error_code_value: str = "CONFLICT"


class ChannelInUseError(ConflictError):
    """
    Exception raised when deleting a channel that still owns videos.

    Channels are protected rather than cascaded: the delete is refused and
    nothing changes.
    """

    def __init__(self, channel_id: str, video_count: int) -> None:
        self.channel_id = channel_id
        self.video_count = video_count
        super().__init__(
            f"Channel '{channel_id}' still owns {video_count} video(s)",
            details={"channel_id": channel_id, "video_count": video_count},
        )


class YouTubeAPIError(VideoScripterError):
    """
    Exception raised for YouTube API errors (502).

    Wraps errors returned by the YouTube Data API client, including client
    errors (4xx) and server errors (5xx).

    Attributes
    ----------
    status_code_upstream : int | None
        HTTP status code returned by the API.
    error_reason : str | None
        The error reason from the API response (e.g., "quotaExceeded").
    """

    status_code: int = 502
    _error_code_value: str = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        message: str = "YouTube API error occurred",
        status_code_upstream: int | None = None,
        error_reason: str | None = None,
    ) -> None:
        self.status_code_upstream: int | None = status_code_upstream
        self.error_reason: str | None = error_reason
        super().__init__(message)


class ExternalResolutionError(VideoScripterError):
    """
    Exception raised when the catalog cannot resolve a single item.

    Ingestion recovers from this locally by skipping the item; it never
    aborts a batch.
    """

    status_code: int = 502
    _error_code_value: str = "EXTERNAL_SERVICE_ERROR"

    def __init__(self, message: str, youtube_id: str) -> None:
        self.youtube_id = youtube_id
        super().__init__(message, details={"youtube_id": youtube_id})


class ChannelResolutionError(ExternalResolutionError):
    """Exception raised when a video's channel cannot be resolved."""

    def __init__(self, channel_id: str, reason: str = "not found in catalog") -> None:
        super().__init__(f"Channel '{channel_id}' {reason}", youtube_id=channel_id)


# Exit codes for CLI integration
EXIT_CODE_SUCCESS = 0
EXIT_CODE_GENERAL_ERROR = 1
EXIT_CODE_NOT_FOUND = 2
EXIT_CODE_STORE_FAILURE = 3
