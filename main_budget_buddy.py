"""Mini README: Entry point CLI for launching the Budget Buddy API.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port and production flags, and prints the palette order
new categories draw their colors from. Settings come from ``BUDGETBUDDY_``
environment variables when flags are omitted.
"""

from __future__ import annotations

import typer
import uvicorn

from budgetbuddy.configuration import get_settings
from budgetbuddy.ledger import palette_order
from budgetbuddy.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch and inspect the Budget Buddy service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Budget Buddy on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "budgetbuddy.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def palette() -> None:
    """Print the colors auto-assigned to new categories, in order."""

    for index, color in enumerate(palette_order()):
        typer.echo(f"{index:2d}  {color}")


if __name__ == "__main__":
    cli()
