"""
Dependency Injection Container for videoscripter.

Centralizes construction of repositories and services:

- Repository factories return new instances each call (transient)
- The catalog client is a lazily created singleton
- Service factories wire repositories and the catalog together

Usage
-----
    >>> from videoscripter.container import container
    >>> ingestion = container.create_ingestion_service()
    >>> projects = container.create_project_service()

Tests replace the catalog by assigning ``container.youtube_service`` (or
passing a mock to a service constructor) and call ``container.reset()``
afterwards.
"""

from __future__ import annotations

from functools import cached_property

from videoscripter.repositories import (
    CategoryRepository,
    ChannelRepository,
    ProjectRepository,
    ScriptRepository,
    TranscriptTopicRepository,
    VideoRepository,
)
from videoscripter.services.ingestion import IngestionService
from videoscripter.services.interfaces import CatalogServiceInterface
from videoscripter.services.project_service import ProjectService
from videoscripter.services.script_service import ScriptService
from videoscripter.services.video_service import VideoService
from videoscripter.services.youtube_service import YouTubeService


class Container:
    """
    Dependency injection container for videoscripter.

    Examples
    --------
    >>> container = Container()
    >>> repo1 = container.create_video_repository()
    >>> repo2 = container.create_video_repository()
    >>> repo1 is repo2
    False
    >>> container.youtube_service is container.youtube_service
    True
    """

    # -------------------------------------------------------------------------
    # Repository Factory Methods (Transient - new instance per call)
    # -------------------------------------------------------------------------

    def create_project_repository(self) -> ProjectRepository:
        """Create a new ProjectRepository instance."""
        return ProjectRepository()

    def create_video_repository(self) -> VideoRepository:
        """Create a new VideoRepository instance."""
        return VideoRepository()

    def create_channel_repository(self) -> ChannelRepository:
        """Create a new ChannelRepository instance."""
        return ChannelRepository()

    def create_script_repository(self) -> ScriptRepository:
        """Create a new ScriptRepository instance."""
        return ScriptRepository()

    def create_category_repository(self) -> CategoryRepository:
        """Create a new CategoryRepository instance."""
        return CategoryRepository()

    def create_transcript_topic_repository(self) -> TranscriptTopicRepository:
        """Create a new TranscriptTopicRepository instance."""
        return TranscriptTopicRepository()

    # -------------------------------------------------------------------------
    # Service Factory Methods (Transient - new instance per call)
    # -------------------------------------------------------------------------

    def create_ingestion_service(self) -> IngestionService:
        """
        Create a new IngestionService with wired dependencies.

        Returns
        -------
        IngestionService
            Service using the singleton catalog client and fresh repositories.
        """
        return IngestionService(
            catalog=self.youtube_service,
            project_repository=self.create_project_repository(),
            video_repository=self.create_video_repository(),
            channel_repository=self.create_channel_repository(),
        )

    def create_project_service(self) -> ProjectService:
        """Create a new ProjectService with wired repositories."""
        return ProjectService(
            project_repository=self.create_project_repository(),
            video_repository=self.create_video_repository(),
            script_repository=self.create_script_repository(),
        )

    def create_video_service(self) -> VideoService:
        """Create a new VideoService with wired dependencies."""
        return VideoService(
            catalog=self.youtube_service,
            project_repository=self.create_project_repository(),
            video_repository=self.create_video_repository(),
        )

    def create_script_service(self) -> ScriptService:
        """Create a new ScriptService with wired repositories."""
        return ScriptService(
            project_repository=self.create_project_repository(),
            script_repository=self.create_script_repository(),
        )

    # -------------------------------------------------------------------------
    # Singleton Service Properties (Cached - same instance on repeated access)
    # -------------------------------------------------------------------------

    @cached_property
    def youtube_service(self) -> CatalogServiceInterface:
        """
        Get the singleton catalog client.

        The client is lazily created on first access; the underlying Google
        API client is only built when a request is made.
        """
        return YouTubeService()

    # -------------------------------------------------------------------------
    # Testing Support
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Clear cached singletons so tests can inject and restore mocks."""
        self.__dict__.pop("youtube_service", None)


# Global container instance
container = Container()
