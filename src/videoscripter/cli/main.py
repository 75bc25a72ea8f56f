"""
Main CLI entry point for videoscripter.
"""

from __future__ import annotations

import logging

import typer
from rich.panel import Panel

from videoscripter import __version__
from videoscripter.cli.commands.api import api_app
from videoscripter.cli.common import console
from videoscripter.cli.db_commands import db_app
from videoscripter.cli.project_commands import project_app
from videoscripter.cli.video_commands import video_app
from videoscripter.config.settings import settings

app = typer.Typer(
    name="videoscripter",
    help="Collect YouTube videos into projects and draft scripts from them",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(db_app, name="db", help="Database commands")
app.add_typer(project_app, name="projects", help="Project commands")
app.add_typer(video_app, name="videos", help="Video commands")
app.add_typer(api_app, name="api", help="API server commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]videoscripter[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    videoscripter - build video scripts from collected YouTube research.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
