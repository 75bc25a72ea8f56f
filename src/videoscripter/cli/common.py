"""
Helpers shared by the CLI command groups.
"""

from __future__ import annotations

import uuid
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.panel import Panel

from videoscripter.exceptions import EXIT_CODE_GENERAL_ERROR

console = Console()

USER_ENV_VAR = "VIDEOSCRIPTER_USER"


def user_option() -> Any:
    """``--user`` option; identity of the CLI caller."""
    return typer.Option(
        "local",
        "--user",
        "-u",
        envvar=USER_ENV_VAR,
        help="User id the command acts as",
    )


def fail(message: str, title: str = "Error", code: int = EXIT_CODE_GENERAL_ERROR) -> NoReturn:
    """Print an error panel and exit with ``code``."""
    console.print(Panel(f"[red]{message}[/red]", title=title, border_style="red"))
    raise typer.Exit(code=code)


def parse_project_id(value: str) -> uuid.UUID:
    """Parse a project id argument, exiting with a readable error if malformed."""
    try:
        return uuid.UUID(value)
    except ValueError:
        fail(f"'{value}' is not a valid project id", title="Invalid Project ID")
