"""
System Commands.

API health, server information and local client configuration.
"""

import typer
from rich.table import Table

from quilt_cli import __version__
from quilt_cli.cli.context import CliState, get_state, run_command
from quilt_cli.cli.output import console, print_response
from quilt_cli.core.logging import get_logger
from quilt_cli.schemas import SCHEMA_VERSION

logger = get_logger(__name__)


def health(ctx: typer.Context) -> None:
    """
    Check API health (no authentication required).
    """
    run_command(_health(get_state(ctx)))


async def _health(state: CliState) -> None:
    logger.info("Checking API health")
    async with state.client() as client:
        response = await client.get("/health", authenticated=False)
    print_response(response)


def system(ctx: typer.Context) -> None:
    """
    Get server system information.
    """
    run_command(_system(get_state(ctx)))


async def _system(state: CliState) -> None:
    logger.info("Getting system info")
    async with state.client() as client:
        response = await client.get("/api/system/info")
    print_response(response)


def _mask(secret: str) -> str:
    if not secret:
        return "-"
    if len(secret) <= 8:
        return "****"
    return f"{secret[:4]}...{secret[-4:]}"


def config(ctx: typer.Context) -> None:
    """
    Display the effective client configuration. Credentials are masked.
    """
    state = get_state(ctx)
    settings = state.settings
    client_config = state.config

    table = Table(title="Client Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("API URL", settings.api_url)
    table.add_row("Auth method", settings.auth_method or "[red]none[/red]")
    table.add_row("Token", _mask(settings.token))
    table.add_row("API key", _mask(settings.api_key))
    table.add_row("Settings file", settings.config or "-")
    table.add_row("Connect timeout", f"{client_config.client.connect_timeout}s")
    table.add_row("Restart delay", f"{client_config.client.restart_delay}s")
    table.add_row("Log level", client_config.logging.level)

    console.print(table)


def version() -> None:
    """
    Display client and request schema versions.
    """
    console.print(f"quilt-cli {__version__} (request schema {SCHEMA_VERSION})", highlight=False)


def register(app: typer.Typer) -> None:
    app.command("health")(health)
    app.command("system")(system)
    app.command("config")(config)
    app.command("version")(version)
