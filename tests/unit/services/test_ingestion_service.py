"""
Tests for IngestionService.

Runs the whole pipeline against a SQLite store with a mocked catalog.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from videoscripter.db.models import Channel as ChannelDB
from videoscripter.db.models import Video as VideoDB
from videoscripter.exceptions import (
    InvalidInputError,
    NotFoundError,
    StoreError,
    YouTubeAPIError,
)
from videoscripter.models.enums import SkipReason
from videoscripter.models.project import ProjectCreate
from videoscripter.models.video import AddVideosToProjectRequest
from videoscripter.repositories.base import active
from videoscripter.repositories.channel_repository import ChannelRepository
from videoscripter.repositories.video_repository import VideoRepository
from videoscripter.services.ingestion import IngestionService
from videoscripter.services.ingestion.ingestion_service import (
    PROJECT_NOT_FOUND_MESSAGE,
)
from videoscripter.services.project_service import ProjectService
from videoscripter.services.video_service import VideoService
from videoscripter.services.youtube_service import YouTubeService
from tests.factories.catalog_factory import (
    ChannelMetadataFactory,
    VideoMetadataFactory,
    make_catalog,
)
from tests.factories.id_factory import YouTubeIdFactory
from tests.factories.project_factory import OTHER_USER, OWNER

pytestmark = pytest.mark.asyncio


async def _count(session, model, *criteria) -> int:
    result = await session.execute(
        select(func.count()).select_from(model).where(*criteria)
    )
    return result.scalar_one()


async def _second_project(session, project_repository, user_id=OWNER):
    project = await project_repository.create_for_user(
        session, obj_in=ProjectCreate(name="Tea", topic="Oolong"), user_id=user_id
    )
    await session.commit()
    return project


@pytest.fixture
def service(catalog) -> IngestionService:
    return IngestionService(catalog=catalog)


class TestIngestNewVideos:
    async def test_batch_with_repeated_id(
        self, db_session, service, project, video_metadata, catalog
    ) -> None:
        a, b = video_metadata[0].video_id, video_metadata[1].video_id

        result = await service.ingest(db_session, project.id, OWNER, [a, b, a])

        assert result.added_count == 2
        assert result.channels_created == 1
        assert result.skipped_for(SkipReason.DUPLICATE_IN_PROJECT) == [a]
        assert await _count(db_session, VideoDB) == 2
        assert await _count(db_session, ChannelDB) == 1
        assert catalog.get_video.await_count == 2
        assert catalog.get_channel.await_count == 1

    async def test_rows_carry_project_and_audit_stamps(
        self, db_session, service, project, video_metadata
    ) -> None:
        metadata = video_metadata[0]
        await service.ingest(db_session, project.id, OWNER, [metadata.video_id])

        video = await VideoRepository().get_active_by_youtube_id(
            db_session, metadata.video_id
        )
        assert video is not None
        assert video.project_id == project.id
        assert video.created_by == OWNER
        assert video.last_modified_by == OWNER
        assert video.is_deleted is False
        assert video.title == metadata.title
        assert video.duration == metadata.duration_seconds
        assert video.view_count == metadata.view_count

    async def test_finish_log_reports_totals(
        self, db_session, service, project, video_metadata, caplog
    ) -> None:
        a = video_metadata[0].video_id
        with caplog.at_level(
            logging.INFO, logger="videoscripter.services.ingestion.ingestion_service"
        ):
            await service.ingest(db_session, project.id, OWNER, [a, a, "unknownvid0"])

        finished = [r.getMessage() for r in caplog.records if "finished" in r.getMessage()]
        assert len(finished) == 1
        assert "3 processed, 1 added (0 reattached), 2 skipped" in finished[0]

    async def test_ids_are_stripped(
        self, db_session, service, project, video_metadata
    ) -> None:
        result = await service.ingest(
            db_session, project.id, OWNER, [f"  {video_metadata[0].video_id} "]
        )
        assert result.added_count == 1

    async def test_existing_channel_is_reused(
        self, db_session, service, project, video_metadata, channel_metadata, catalog
    ) -> None:
        stored = await ChannelRepository().create(
            db_session,
            obj_in={"youtube_id": channel_metadata.channel_id, "title": "Stored"},
            user_id=OTHER_USER,
        )
        await db_session.commit()

        result = await service.ingest(
            db_session, project.id, OWNER, [video_metadata[0].video_id]
        )

        assert result.channels_created == 0
        catalog.get_channel.assert_not_awaited()
        video = await VideoRepository().get_active_by_youtube_id(
            db_session, video_metadata[0].video_id
        )
        assert video.channel_id == stored.id
        assert await _count(db_session, ChannelDB) == 1


class TestSkips:
    async def test_unknown_video_is_unresolvable(
        self, db_session, service, project, video_metadata
    ) -> None:
        result = await service.ingest(
            db_session, project.id, OWNER, [video_metadata[0].video_id, "unknownvid0"]
        )
        assert result.added_count == 1
        assert result.skipped_for(SkipReason.UNRESOLVABLE) == ["unknownvid0"]

    async def test_catalog_error_is_unresolvable(
        self, db_session, project, video_metadata, channel_metadata
    ) -> None:
        good, bad = video_metadata[0], video_metadata[1]
        catalog = make_catalog(videos=[good], channels=[channel_metadata])

        async def get_video(video_id):
            if video_id == bad.video_id:
                raise YouTubeAPIError("quota", status_code_upstream=403)
            return good

        catalog.get_video.side_effect = get_video
        service = IngestionService(catalog=catalog)

        result = await service.ingest(
            db_session, project.id, OWNER, [bad.video_id, good.video_id]
        )

        assert result.added_count == 1
        assert result.skipped_for(SkipReason.UNRESOLVABLE) == [bad.video_id]

    async def test_unknown_channel_skips_video(self, db_session, project) -> None:
        orphan = VideoMetadataFactory()
        service = IngestionService(catalog=make_catalog(videos=[orphan]))

        result = await service.ingest(db_session, project.id, OWNER, [orphan.video_id])

        assert result.added_count == 0
        assert result.skipped_for(SkipReason.CHANNEL_UNRESOLVABLE) == [orphan.video_id]
        assert await _count(db_session, VideoDB) == 0
        assert await _count(db_session, ChannelDB) == 0

    async def test_reingest_is_all_duplicates(
        self, db_session, service, project, video_metadata
    ) -> None:
        ids = [v.video_id for v in video_metadata]
        await service.ingest(db_session, project.id, OWNER, ids)

        result = await service.ingest(db_session, project.id, OWNER, ids)

        assert result.added_count == 0
        assert result.skipped_for(SkipReason.DUPLICATE_IN_PROJECT) == ids
        assert await _count(db_session, VideoDB) == 3

    async def test_video_in_other_project_is_skipped(
        self, db_session, service, project, project_repository, video_metadata
    ) -> None:
        video_id = video_metadata[0].video_id
        await service.ingest(db_session, project.id, OWNER, [video_id])
        other = await _second_project(db_session, project_repository)

        result = await service.ingest(db_session, other.id, OWNER, [video_id])

        assert result.added_count == 0
        assert result.skipped_for(SkipReason.ATTACHED_TO_OTHER_PROJECT) == [video_id]
        assert await _count(db_session, VideoDB) == 1


class TestReattach:
    async def test_unattached_video_is_reattached(
        self, db_session, service, project, project_repository, video_metadata, catalog
    ) -> None:
        video_id = video_metadata[0].video_id
        await service.ingest(db_session, project.id, OWNER, [video_id])
        assert await ProjectService().delete_project(db_session, project.id, OWNER)
        other = await _second_project(db_session, project_repository)
        catalog.get_video.reset_mock()

        result = await service.ingest(db_session, other.id, OWNER, [video_id])

        assert result.added_count == 1
        assert result.reattached_count == 1
        catalog.get_video.assert_not_awaited()
        video = await VideoRepository().get_active_by_youtube_id(db_session, video_id)
        assert video.project_id == other.id
        assert await _count(db_session, VideoDB) == 1

    async def test_other_users_unattached_video_stays_with_them(
        self, db_session, service, project, project_repository, video_metadata, catalog
    ) -> None:
        video_id = video_metadata[0].video_id
        theirs = await _second_project(db_session, project_repository, OTHER_USER)
        await service.ingest(db_session, theirs.id, OTHER_USER, [video_id])
        assert await ProjectService().delete_project(db_session, theirs.id, OTHER_USER)
        video_service = VideoService(catalog=catalog)
        assert len(await video_service.get_unattached_videos(db_session, OTHER_USER)) == 1

        result = await service.ingest(db_session, project.id, OWNER, [video_id])

        assert result.added_count == 0
        assert result.reattached_count == 0
        assert result.skipped_for(SkipReason.OWNED_BY_OTHER_USER) == [video_id]
        unattached = await video_service.get_unattached_videos(db_session, OTHER_USER)
        assert [v.youtube_id for v in unattached] == [video_id]
        assert await video_service.get_project_videos(db_session, project.id, OWNER) == []

    async def test_deleted_video_does_not_block_reingest(
        self, db_session, service, project, video_metadata
    ) -> None:
        video_id = video_metadata[0].video_id
        await service.ingest(db_session, project.id, OWNER, [video_id])
        repo = VideoRepository()
        video = await repo.get_active_by_youtube_id(db_session, video_id)
        await repo.soft_delete(db_session, db_obj=video, user_id=OWNER)
        await db_session.commit()

        result = await service.ingest(db_session, project.id, OWNER, [video_id])

        assert result.added_count == 1
        assert await _count(db_session, VideoDB, VideoDB.youtube_id == video_id) == 2
        assert (
            await _count(
                db_session,
                VideoDB,
                VideoDB.youtube_id == video_id,
                active(VideoDB),
            )
            == 1
        )


class TestRejectedBatches:
    @pytest.mark.parametrize("ids", [[], ["   "], ["abc", ""]])
    async def test_invalid_ids(self, db_session, service, project, catalog, ids) -> None:
        with pytest.raises(InvalidInputError):
            await service.ingest(db_session, project.id, OWNER, ids)
        catalog.get_video.assert_not_awaited()

    async def test_blank_owner(self, db_session, service, project) -> None:
        with pytest.raises(InvalidInputError):
            await service.ingest(db_session, project.id, "  ", ["abc"])

    async def test_foreign_project(
        self, db_session, service, project, video_metadata, catalog
    ) -> None:
        with pytest.raises(NotFoundError):
            await service.ingest(
                db_session, project.id, OTHER_USER, [video_metadata[0].video_id]
            )
        catalog.get_video.assert_not_awaited()
        assert await _count(db_session, VideoDB) == 0

    async def test_deleted_project(
        self, db_session, service, project, video_metadata
    ) -> None:
        await ProjectService().delete_project(db_session, project.id, OWNER)
        with pytest.raises(NotFoundError):
            await service.ingest(
                db_session, project.id, OWNER, [video_metadata[0].video_id]
            )
        assert await _count(db_session, VideoDB) == 0
        assert await _count(db_session, ChannelDB) == 0


class TestTransaction:
    async def test_commit_failure_persists_nothing(
        self,
        db_session,
        session_factory,
        service,
        project,
        video_metadata,
        monkeypatch,
    ) -> None:
        project_id = project.id
        monkeypatch.setattr(
            db_session,
            "commit",
            AsyncMock(
                side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
            ),
        )

        with pytest.raises(StoreError) as exc_info:
            await service.ingest(
                db_session, project_id, OWNER, [v.video_id for v in video_metadata]
            )
        assert exc_info.value.operation == "ingest"

        async with session_factory() as fresh:
            assert await _count(fresh, VideoDB) == 0
            assert await _count(fresh, ChannelDB) == 0

    async def test_concurrently_created_channel_is_reused(
        self, db_session, project, video_metadata, channel_metadata
    ) -> None:
        catalog = make_catalog(videos=video_metadata, channels=[channel_metadata])
        channel_repository = ChannelRepository()
        winner_ids = []

        async def get_channel(channel_id):
            # Another batch wins the race between lookup and insert. The winning
            # row is flushed in this same session: SQLite cannot commit it from a
            # second connection while this transaction holds its read lock. The
            # savepoint and re-point path is the same either way.
            winner = await channel_repository.create(
                db_session,
                obj_in={"youtube_id": channel_id, "title": "Winner"},
                user_id=OTHER_USER,
            )
            winner_ids.append(winner.id)
            return channel_metadata

        catalog.get_channel.side_effect = get_channel
        service = IngestionService(catalog=catalog)
        ids = [v.video_id for v in video_metadata[:2]]

        result = await service.ingest(db_session, project.id, OWNER, ids)

        assert result.added_count == 2
        assert result.channels_created == 0
        assert await _count(db_session, ChannelDB) == 1
        videos = await VideoRepository().get_active_by_youtube_ids(db_session, ids)
        assert {v.channel_id for v in videos.values()} == set(winner_ids)

    async def test_read_failure_raises_store_error(
        self,
        db_session,
        session_factory,
        service,
        project,
        video_metadata,
        catalog,
        monkeypatch,
    ) -> None:
        monkeypatch.setattr(
            db_session,
            "execute",
            AsyncMock(
                side_effect=OperationalError(
                    "SELECT", {}, Exception("connection refused")
                )
            ),
        )

        with pytest.raises(StoreError) as exc_info:
            await service.ingest(
                db_session, project.id, OWNER, [video_metadata[0].video_id]
            )

        assert exc_info.value.operation == "ingest"
        assert isinstance(exc_info.value.original_error, OperationalError)
        catalog.get_video.assert_not_awaited()
        async with session_factory() as fresh:
            assert await _count(fresh, VideoDB) == 0


def _item(video_id: str, channel_id: str) -> dict:
    return {
        "id": video_id,
        "snippet": {
            "title": f"Video {video_id}",
            "channelId": channel_id,
            "publishedAt": "2021-03-01T12:00:00Z",
        },
        "contentDetails": {"duration": "PT4M"},
    }


class TestCatalogTransportFailures:
    """A real YouTubeService over a mocked Google client."""

    @pytest.fixture
    def channel_id(self) -> str:
        return YouTubeIdFactory.create_channel_id("espresso-lab")

    @pytest.fixture
    def client(self, channel_id) -> MagicMock:
        client = MagicMock()

        def list_videos(part, id):
            request = MagicMock()
            if id == "timeoutvid0":
                request.execute.side_effect = TimeoutError("timed out")
            else:
                request.execute.return_value = {"items": [_item(id, channel_id)]}
            return request

        client.videos.return_value.list.side_effect = list_videos
        client.channels.return_value.list.return_value.execute.return_value = {
            "items": [{"id": channel_id, "snippet": {"title": "Espresso Lab"}}]
        }
        return client

    async def test_video_timeout_skips_only_that_video(
        self, db_session, project, client
    ) -> None:
        good_id = YouTubeIdFactory.create_video_id("tamping")
        service = IngestionService(
            catalog=YouTubeService(api_key="test-key", service=client)
        )

        result = await service.ingest(
            db_session, project.id, OWNER, ["timeoutvid0", good_id]
        )

        assert result.added_count == 1
        assert result.skipped_for(SkipReason.UNRESOLVABLE) == ["timeoutvid0"]
        stored = await VideoRepository().get_active_by_youtube_ids(
            db_session, [good_id]
        )
        assert stored[good_id].project_id == project.id

    async def test_channel_timeout_skips_its_videos(
        self, db_session, project, client
    ) -> None:
        client.channels.return_value.list.return_value.execute.side_effect = (
            ConnectionResetError("connection reset by peer")
        )
        good_id = YouTubeIdFactory.create_video_id("tamping")
        service = IngestionService(
            catalog=YouTubeService(api_key="test-key", service=client)
        )

        result = await service.ingest(db_session, project.id, OWNER, [good_id])

        assert result.added_count == 0
        assert result.skipped_for(SkipReason.CHANNEL_UNRESOLVABLE) == [good_id]
        assert await _count(db_session, ChannelDB) == 0


class TestAddVideosToProject:
    async def test_success_message(
        self, db_session, service, project, video_metadata
    ) -> None:
        ids = [video_metadata[0].video_id, "unknownvid0"]
        response = await service.add_videos_to_project(
            db_session,
            AddVideosToProjectRequest(project_id=project.id, video_ids=ids),
            OWNER,
        )
        assert response.success is True
        assert response.video_count == 1
        assert response.message == "Successfully added 1 videos to the project (1 skipped)"
        assert response.error_code is None

    async def test_all_duplicates_is_still_success(
        self, db_session, service, project, video_metadata
    ) -> None:
        request = AddVideosToProjectRequest(
            project_id=project.id, video_ids=[video_metadata[0].video_id]
        )
        await service.add_videos_to_project(db_session, request, OWNER)

        response = await service.add_videos_to_project(db_session, request, OWNER)

        assert response.success is True
        assert response.video_count == 0

    async def test_foreign_project(self, db_session, service, project) -> None:
        response = await service.add_videos_to_project(
            db_session,
            AddVideosToProjectRequest(project_id=project.id, video_ids=["abc"]),
            OTHER_USER,
        )
        assert response.success is False
        assert response.message == PROJECT_NOT_FOUND_MESSAGE
        assert response.error_code == "NOT_FOUND"

    async def test_empty_list(self, db_session, service, project) -> None:
        response = await service.add_videos_to_project(
            db_session,
            AddVideosToProjectRequest(project_id=project.id, video_ids=[]),
            OWNER,
        )
        assert response.success is False
        assert response.error_code == "VALIDATION_ERROR"

    async def test_store_failure(
        self, db_session, service, project, video_metadata, monkeypatch
    ) -> None:
        request = AddVideosToProjectRequest(
            project_id=project.id, video_ids=[video_metadata[0].video_id]
        )
        monkeypatch.setattr(
            db_session,
            "commit",
            AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("locked"))),
        )

        response = await service.add_videos_to_project(db_session, request, OWNER)

        assert response.success is False
        assert response.video_count == 0
        assert response.error_code == "DATABASE_ERROR"
        assert response.message.startswith("Error adding videos to project:")

    async def test_read_failure_is_reported(
        self, db_session, service, project, video_metadata, monkeypatch
    ) -> None:
        request = AddVideosToProjectRequest(
            project_id=project.id, video_ids=[video_metadata[0].video_id]
        )
        monkeypatch.setattr(
            db_session,
            "execute",
            AsyncMock(
                side_effect=OperationalError(
                    "SELECT", {}, Exception("connection refused")
                )
            ),
        )

        response = await service.add_videos_to_project(db_session, request, OWNER)

        assert response.success is False
        assert response.video_count == 0
        assert response.error_code == "DATABASE_ERROR"

    async def test_unexpected_error_is_reported(
        self, db_session, session_factory, project, video_metadata, catalog
    ) -> None:
        catalog.get_video.side_effect = RuntimeError("catalog exploded")
        service = IngestionService(catalog=catalog)
        request = AddVideosToProjectRequest(
            project_id=project.id, video_ids=[video_metadata[0].video_id]
        )

        response = await service.add_videos_to_project(db_session, request, OWNER)

        assert response.success is False
        assert response.video_count == 0
        assert response.error_code == "INTERNAL_ERROR"
        assert response.message == "Error adding videos to project: RuntimeError"
        async with session_factory() as fresh:
            assert await _count(fresh, VideoDB) == 0
