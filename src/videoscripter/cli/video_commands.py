"""
Video CLI commands for videoscripter.

Search the YouTube catalog and manage the videos collected in projects.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from videoscripter.cli.common import console, fail, parse_project_id, user_option
from videoscripter.config.database import db_manager
from videoscripter.container import container
from videoscripter.exceptions import (
    EXIT_CODE_NOT_FOUND,
    EXIT_CODE_STORE_FAILURE,
    InvalidInputError,
    StoreError,
    YouTubeAPIError,
)
from videoscripter.models.video import AddVideosToProjectRequest, ProjectVideo

video_app = typer.Typer(
    name="videos",
    help="Video search and project video commands",
    no_args_is_help=True,
)


def _video_table(title: str, videos: List[ProjectVideo]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Video ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Channel", style="white")
    table.add_column("Duration", style="green", justify="right")
    table.add_column("Views", style="yellow", justify="right")
    for video in videos:
        table.add_row(
            video.youtube_id,
            video.title,
            video.channel_title,
            video.formatted_duration,
            f"{video.view_count:,}",
        )
    return table


@video_app.command("search")
def search_videos(
    query: str = typer.Argument(..., help="Search term"),
    max_results: Optional[int] = typer.Option(
        None, "--max-results", "-n", min=1, max=50, help="Maximum results (default 25)"
    ),
) -> None:
    """Search YouTube for videos."""

    async def run_search() -> None:
        service = container.create_video_service()
        results = await service.search_videos(query, max_results)
        if not results:
            console.print(f"[yellow]No videos found for '{query}'[/yellow]")
            return

        table = Table(
            title=f"Results for '{query}' ({len(results)})",
            show_header=True,
            header_style="bold blue",
        )
        table.add_column("Video ID", style="dim")
        table.add_column("Title", style="cyan")
        table.add_column("Channel", style="white")
        table.add_column("Duration", style="green", justify="right")
        table.add_column("Views", style="yellow", justify="right")
        for video in results:
            table.add_row(
                video.video_id,
                video.title,
                video.channel_title,
                video.formatted_duration,
                f"{video.view_count:,}",
            )
        console.print(table)

    try:
        asyncio.run(run_search())
    except InvalidInputError as e:
        fail(e.message, title="Invalid Search")
    except YouTubeAPIError as e:
        fail(e.message, title="YouTube API Error")


@video_app.command("add")
def add_videos(
    project_id: str = typer.Argument(..., help="Project ID"),
    video_ids: List[str] = typer.Argument(..., help="YouTube video IDs"),
    user: str = user_option(),
) -> None:
    """Add YouTube videos to a project."""
    request = AddVideosToProjectRequest(
        project_id=parse_project_id(project_id), video_ids=video_ids
    )

    async def run_add() -> None:
        service = container.create_ingestion_service()
        async for session in db_manager.get_session():
            response = await service.add_videos_to_project(session, request, user)
            if response.success:
                console.print(
                    Panel(
                        f"[green]{response.message}[/green]",
                        title="Videos Added",
                        border_style="green",
                    )
                )
                return
            if response.error_code == "NOT_FOUND":
                fail(response.message, "Not Found", EXIT_CODE_NOT_FOUND)
            if response.error_code == "DATABASE_ERROR":
                fail(response.message, "Store Error", EXIT_CODE_STORE_FAILURE)
            fail(response.message)

    asyncio.run(run_add())


@video_app.command("list")
def list_videos(
    project_id: Optional[str] = typer.Argument(
        None, help="Project ID (omit to list unattached videos)"
    ),
    user: str = user_option(),
) -> None:
    """List a project's videos, or your unattached videos."""
    pid = parse_project_id(project_id) if project_id else None

    async def run_list() -> None:
        service = container.create_video_service()
        projects = container.create_project_service()
        async for session in db_manager.get_session():
            if pid is None:
                videos = await service.get_unattached_videos(session, user)
                title = f"Unattached videos ({len(videos)})"
            else:
                if not await projects.project_exists(session, pid, user):
                    fail(f"Project '{pid}' not found", "Not Found", EXIT_CODE_NOT_FOUND)
                videos = await service.get_project_videos(session, pid, user)
                title = f"Project videos ({len(videos)})"

            if not videos:
                console.print("[yellow]No videos[/yellow]")
                return
            console.print(_video_table(title, videos))

    asyncio.run(run_list())


@video_app.command("remove")
def remove_video(
    project_id: str = typer.Argument(..., help="Project ID"),
    video_id: str = typer.Argument(..., help="YouTube video ID"),
    user: str = user_option(),
) -> None:
    """Remove a video from a project."""
    pid = parse_project_id(project_id)

    async def run_remove() -> bool:
        service = container.create_video_service()
        async for session in db_manager.get_session():
            return await service.remove_video_from_project(session, pid, video_id, user)
        return False

    try:
        removed = asyncio.run(run_remove())
    except StoreError as e:
        fail(e.message, title="Store Error", code=EXIT_CODE_STORE_FAILURE)
    if not removed:
        fail(
            f"Video '{video_id}' not found in project '{project_id}'",
            "Not Found",
            EXIT_CODE_NOT_FOUND,
        )
    console.print(f"[green]Removed {video_id} from project {project_id}[/green]")
