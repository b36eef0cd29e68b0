"""
Quilt CLI application.

Root Typer app. The callback loads settings from the environment and the
optional settings file, configures logging, and stores both on the context
object for the subcommands.

Usage:
    quilt --help
    quilt list running
    quilt exec <id> --timeout=5000 "ls -la"
    quilt env-set <id> KEY=VALUE
    quilt -v volume-put data ./notes.txt /notes.txt
"""

import sys

import structlog
import typer

from quilt_cli.cli.commands import COMMAND_MODULES
from quilt_cli.cli.context import get_state
from quilt_cli.cli.output import print_error
from quilt_cli.core.config import load_client_config, load_settings, resolve_config_path
from quilt_cli.core.exceptions import ConfigError
from quilt_cli.core.logging import get_logger, setup_logging

app = typer.Typer(
    name="quilt",
    help="Quilt API client - manage containers, volumes and terminal sessions.",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    add_completion=False,
)

for module in COMMAND_MODULES:
    module.register(app)


@app.command("help")
def help_command(ctx: typer.Context) -> None:
    """
    Show this message and exit.
    """
    typer.echo(ctx.parent.get_help())


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Quilt API client.

    Credentials come from QUILT_TOKEN (bearer) or QUILT_API_KEY. The API
    endpoint is QUILT_API_URL (default https://backend.quilt.sh).
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    state = get_state(ctx)
    try:
        if state.settings is None:
            state.settings = load_settings()
        if state.config is None:
            state.config = load_client_config(resolve_config_path(state.settings))
    except ConfigError as e:
        print_error(e)
        raise typer.Exit(1) from e

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = None

    setup_logging(level=log_level, config=state.config.logging)
    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug(
        "CLI invoked",
        command=ctx.invoked_subcommand,
        api_url=state.settings.api_url,
        auth_method=state.settings.auth_method,
    )


def main() -> None:
    """
    Console-script entry point.

    Runs the app in standalone mode so typer reports usage errors with a
    hint. Every failure, including those usage errors (status 2), exits
    with status 1.
    """
    try:
        app()
    except SystemExit as e:
        if e.code == 2:
            sys.exit(1)
        raise
