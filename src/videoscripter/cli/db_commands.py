"""
Database CLI commands for videoscripter.
"""

from __future__ import annotations

import asyncio

import typer
from rich.panel import Panel

from videoscripter.cli.common import console
from videoscripter.config.database import db_manager

db_app = typer.Typer(
    name="db",
    help="Database management commands",
    no_args_is_help=True,
)


@db_app.command("init")
def init_db() -> None:
    """Create all tables (use Alembic migrations for managed databases)."""

    async def run_init() -> None:
        await db_manager.create_tables()
        await db_manager.close()

    asyncio.run(run_init())
    console.print(
        Panel(
            "[green]Database tables created[/green]",
            title="Database",
            border_style="green",
        )
    )


@db_app.command("drop")
def drop_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Drop all tables. Every project, video and script is lost."""
    if not yes and not typer.confirm("Drop all videoscripter tables?"):
        raise typer.Abort()

    async def run_drop() -> None:
        await db_manager.drop_tables()
        await db_manager.close()

    asyncio.run(run_drop())
    console.print(
        Panel(
            "[yellow]Database tables dropped[/yellow]",
            title="Database",
            border_style="yellow",
        )
    )
