"""CLI commands for API server management."""

from __future__ import annotations

import typer

api_app = typer.Typer(
    name="api",
    help="API server management commands",
    no_args_is_help=True,
)

APP_PATH = "videoscripter.api.main:app"


@api_app.command()
def start(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run the server on"),
    production: bool = typer.Option(
        False, "--production", help="Run in production mode"
    ),
) -> None:
    """
    Start the videoscripter API server.

    Development mode (default): auto-reload, info logging.
    Production mode: two workers, warning-level logging.

    Examples:
        videoscripter api start
        videoscripter api start --port 3000 --production
    """
    import uvicorn

    if production:
        uvicorn.run(APP_PATH, host=host, port=port, workers=2, log_level="warning")
    else:
        uvicorn.run(APP_PATH, host=host, port=port, reload=True, log_level="info")
