"""
Shared pytest configuration and fixtures for videoscripter tests.

Store-level tests run against a throwaway SQLite file per test; the catalog
client is always an ``AsyncMock``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from videoscripter.config.settings import Settings
from videoscripter.db.models import Base
from videoscripter.models.project import ProjectCreate
from videoscripter.repositories.project_repository import ProjectRepository
from tests.factories.catalog_factory import (
    ChannelMetadataFactory,
    VideoMetadataFactory,
    make_catalog,
)
from tests.factories.project_factory import OWNER


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        youtube_api_key="test-key",
        log_level="DEBUG",
    )

@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite engine with the schema created and SAVEPOINT support enabled."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    # pysqlite's implicit BEGIN breaks SAVEPOINT; emit BEGIN ourselves
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_implicit_begin(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, expire_on_commit=False)

@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session

@pytest.fixture
def channel_metadata():
    return ChannelMetadataFactory(title="Espresso Lab")

@pytest.fixture
def video_metadata(channel_metadata):
    """Three catalog videos from the same channel."""
    return [
        VideoMetadataFactory(channel_id=channel_metadata.channel_id)
        for _ in range(3)
    ]

@pytest.fixture
def catalog(video_metadata, channel_metadata):
    """Catalog mock that knows the fixture videos and channel."""
    return make_catalog(videos=video_metadata, channels=[channel_metadata])

@pytest.fixture
def project_repository() -> ProjectRepository:
    return ProjectRepository()

@pytest.fixture
async def project(db_session: AsyncSession, project_repository: ProjectRepository):
    """A committed project owned by ``OWNER``."""
    db_obj = await project_repository.create_for_user(
        db_session,
        obj_in=ProjectCreate(name="Coffee", topic="History of espresso machines"),
        user_id=OWNER,
    )
    await db_session.commit()
    return db_obj
