"""
Tests for ScriptService.
"""

import uuid

import pytest

from videoscripter.exceptions import NotFoundError
from videoscripter.models.script import ScriptUpdate
from videoscripter.services.script_service import ScriptService
from tests.factories.project_factory import OTHER_USER, OWNER, ScriptCreateFactory

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service() -> ScriptService:
    return ScriptService()


@pytest.fixture
async def script(db_session, service, project):
    return await service.create_script(
        db_session, project.id, ScriptCreateFactory(title="Intro"), OWNER
    )


class TestCreateScript:
    async def test_starts_at_version_one(self, script, project) -> None:
        assert script.version == 1
        assert script.project_id == project.id

    async def test_foreign_project_raises(self, db_session, service, project) -> None:
        with pytest.raises(NotFoundError):
            await service.create_script(
                db_session, project.id, ScriptCreateFactory(), OTHER_USER
            )

    async def test_unknown_project_raises(self, db_session, service) -> None:
        with pytest.raises(NotFoundError):
            await service.list_scripts(db_session, uuid.uuid4(), OWNER)


class TestUpdateScript:
    async def test_content_change_bumps_version(
        self, db_session, service, project, script
    ) -> None:
        updated = await service.update_script(
            db_session, project.id, script.id, ScriptUpdate(content="New body"), OWNER
        )
        assert updated.version == 2
        assert updated.content == "New body"
        assert updated.title == "Intro"

    async def test_same_content_keeps_version(
        self, db_session, service, project, script
    ) -> None:
        updated = await service.update_script(
            db_session,
            project.id,
            script.id,
            ScriptUpdate(title=script.title, content=script.content),
            OWNER,
        )
        assert updated.version == 1

    async def test_unknown_script_is_none(self, db_session, service, project) -> None:
        result = await service.update_script(
            db_session, project.id, uuid.uuid4(), ScriptUpdate(content="x"), OWNER
        )
        assert result is None


class TestDeleteScript:
    async def test_delete(self, db_session, service, project, script) -> None:
        assert await service.delete_script(db_session, project.id, script.id, OWNER)
        assert await service.list_scripts(db_session, project.id, OWNER) == []

    async def test_delete_as_other_user(
        self, db_session, service, project, script
    ) -> None:
        assert not await service.delete_script(
            db_session, project.id, script.id, OTHER_USER
        )
        assert len(await service.list_scripts(db_session, project.id, OWNER)) == 1
