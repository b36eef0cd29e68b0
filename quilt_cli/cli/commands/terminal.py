"""
Terminal Session Commands.

Creates a server-side shell session. Attaching to it happens over the
returned WebSocket URL, outside this client.
"""

import typer

from quilt_cli.cli.client import response_object
from quilt_cli.cli.context import CliState, get_state, non_empty, run_command
from quilt_cli.cli.output import info, print_data, success, warn
from quilt_cli.core.logging import get_logger
from quilt_cli.schemas import TerminalSessionCreate

logger = get_logger(__name__)


def shell(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Create a terminal session for a container (prints the session JSON).
    """
    run_command(_shell(get_state(ctx), container_id))


async def _shell(state: CliState, container_id: str) -> None:
    terminal = state.config.terminal
    body = TerminalSessionCreate(
        container_id=container_id,
        cols=terminal.cols,
        rows=terminal.rows,
        shell=terminal.shell,
    )

    logger.info("Creating terminal session", container_id=container_id)
    async with state.client() as client:
        response = await client.post("/api/terminal/sessions", json=body.to_payload())

    session = response_object(response)
    session_id = session.get("session_id")
    websocket_url = session.get("websocket_url")

    if session_id:
        success(f"Terminal session created: {session_id}")
    if websocket_url:
        info(f"WebSocket URL: {websocket_url}")
    else:
        warn("No websocket_url in response (check server version / auth method).")

    print_data(session)


def register(app: typer.Typer) -> None:
    app.command("shell")(shell)
