"""
Tests for the videoscripter CLI.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from videoscripter import __version__
from videoscripter.cli.main import app
from videoscripter.config.database import DatabaseManager
from videoscripter.container import container
from videoscripter.exceptions import YouTubeAPIError
from tests.factories.catalog_factory import VideoMetadataFactory, make_catalog


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_catalog():
    """Catalog mock installed in the global container for one test."""
    catalog = make_catalog(videos=[VideoMetadataFactory(title="Lever machine teardown")])
    container.youtube_service = catalog
    yield catalog
    container.reset()


def test_cli_version(runner):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"v{__version__}" in result.stdout


def test_cli_help(runner):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for group in ("projects", "videos", "db", "api"):
        assert group in result.stdout


def test_add_rejects_malformed_project_id(runner):
    result = runner.invoke(app, ["videos", "add", "not-a-uuid", "dQw4w9WgXcQ"])
    assert result.exit_code == 1
    assert "valid project id" in result.stdout


def test_search_prints_results(runner, mock_catalog):
    result = runner.invoke(app, ["videos", "search", "espresso", "-n", "5"])
    assert result.exit_code == 0
    assert "Lever machine teardown" in result.stdout
    mock_catalog.search.assert_awaited_once_with("espresso", 5)


def test_search_rejects_blank_query(runner, mock_catalog):
    result = runner.invoke(app, ["videos", "search", "   "])
    assert result.exit_code == 1
    assert "Search term cannot be empty" in result.stdout
    mock_catalog.search.assert_not_awaited()


def test_search_reports_catalog_failure(runner, mock_catalog):
    mock_catalog.search.side_effect = YouTubeAPIError("YouTube API error during search")
    result = runner.invoke(app, ["videos", "search", "espresso"])
    assert result.exit_code == 1
    assert "YouTube API Error" in result.stdout


def test_db_init_and_drop(runner, tmp_path, monkeypatch):
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setattr("videoscripter.cli.db_commands.db_manager", manager)

    created = runner.invoke(app, ["db", "init"])
    assert created.exit_code == 0
    assert "Database tables created" in created.stdout

    dropped = runner.invoke(app, ["db", "drop", "--yes"])
    assert dropped.exit_code == 0
    assert "Database tables dropped" in dropped.stdout


def test_db_drop_requires_confirmation(runner):
    result = runner.invoke(app, ["db", "drop"], input="n\n")
    assert result.exit_code != 0
