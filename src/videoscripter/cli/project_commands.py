"""
Project CLI commands for videoscripter.
"""

from __future__ import annotations

import asyncio

import typer
from rich.panel import Panel
from rich.table import Table

from videoscripter.cli.common import console, fail, parse_project_id, user_option
from videoscripter.config.database import db_manager
from videoscripter.container import container
from videoscripter.exceptions import (
    EXIT_CODE_NOT_FOUND,
    EXIT_CODE_STORE_FAILURE,
    StoreError,
)
from videoscripter.models.project import ProjectCreate, ProjectUpdate

project_app = typer.Typer(
    name="projects",
    help="Project management commands",
    no_args_is_help=True,
)


@project_app.command("list")
def list_projects(user: str = user_option()) -> None:
    """List your projects, most recently modified first."""

    async def run_list() -> None:
        service = container.create_project_service()
        async for session in db_manager.get_session():
            projects = await service.list_projects(session, user)

            if not projects:
                console.print(
                    Panel(
                        "[yellow]No projects yet[/yellow]\n"
                        "Use 'videoscripter projects create' to start one",
                        title="No Projects",
                        border_style="yellow",
                    )
                )
                return

            table = Table(
                title=f"Projects ({len(projects)} total)",
                show_header=True,
                header_style="bold blue",
            )
            table.add_column("ID", style="dim")
            table.add_column("Name", style="cyan")
            table.add_column("Topic", style="white")
            table.add_column("Videos", style="yellow", justify="right")
            table.add_column("Scripts", style="yellow", justify="right")
            table.add_column("Modified", style="green")

            for project in projects:
                table.add_row(
                    str(project.id),
                    project.name,
                    project.topic,
                    str(project.video_count),
                    str(project.script_count),
                    project.last_modified_at.strftime("%Y-%m-%d %H:%M"),
                )
            console.print(table)

    asyncio.run(run_list())


@project_app.command("create")
def create_project(
    name: str = typer.Argument(..., help="Project name"),
    topic: str = typer.Argument(..., help="What the project is about"),
    user: str = user_option(),
) -> None:
    """Create a project."""
    try:
        obj_in = ProjectCreate(name=name, topic=topic)
    except ValueError as e:
        fail(str(e), title="Invalid Project")

    async def run_create() -> None:
        service = container.create_project_service()
        async for session in db_manager.get_session():
            project = await service.create_project(session, obj_in, user)
            console.print(
                Panel(
                    f"[green]Created project[/green] [cyan]{project.name}[/cyan]\n"
                    f"ID: {project.id}",
                    title="Project Created",
                    border_style="green",
                )
            )

    try:
        asyncio.run(run_create())
    except StoreError as e:
        fail(e.message, title="Store Error", code=EXIT_CODE_STORE_FAILURE)


@project_app.command("rename")
def rename_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str = typer.Option(..., "--name", "-n", help="New name"),
    topic: str = typer.Option(None, "--topic", "-t", help="New topic"),
    user: str = user_option(),
) -> None:
    """Rename a project, optionally changing its topic."""
    pid = parse_project_id(project_id)

    async def run_rename() -> bool:
        service = container.create_project_service()
        async for session in db_manager.get_session():
            current = await service.get_project(session, pid, user)
            if current is None:
                return False
            try:
                obj_in = ProjectUpdate(id=pid, name=name, topic=topic or current.topic)
            except ValueError as e:
                fail(str(e), title="Invalid Project")
            updated = await service.update_project(session, obj_in, user)
            return updated is not None
        return False

    try:
        found = asyncio.run(run_rename())
    except StoreError as e:
        fail(e.message, title="Store Error", code=EXIT_CODE_STORE_FAILURE)
    if not found:
        fail(f"Project '{project_id}' not found", "Not Found", EXIT_CODE_NOT_FOUND)
    console.print(f"[green]Project {project_id} updated[/green]")


@project_app.command("delete")
def delete_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    user: str = user_option(),
) -> None:
    """Delete a project. Its videos are kept; its scripts are deleted."""
    pid = parse_project_id(project_id)
    if not yes:
        typer.confirm(f"Delete project {project_id}?", abort=True)

    async def run_delete() -> bool:
        service = container.create_project_service()
        async for session in db_manager.get_session():
            return await service.delete_project(session, pid, user)
        return False

    try:
        deleted = asyncio.run(run_delete())
    except StoreError as e:
        fail(e.message, title="Store Error", code=EXIT_CODE_STORE_FAILURE)
    if not deleted:
        fail(f"Project '{project_id}' not found", "Not Found", EXIT_CODE_NOT_FOUND)
    console.print(f"[green]Project {project_id} deleted[/green]")
