"""
Network and Monitoring Commands.
"""

from typing import Optional

import typer

from quilt_cli.cli.context import get_state, non_empty, request_and_print, run_command
from quilt_cli.core.logging import get_logger

logger = get_logger(__name__)


def network(ctx: typer.Context) -> None:
    """
    Get network allocations.
    """
    logger.info("Getting network allocations")
    run_command(request_and_print(get_state(ctx), "GET", "/api/network/allocations"))


def network_diag(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Get network diagnostics for a container.
    """
    logger.info("Getting network diagnostics", container_id=container_id)
    run_command(request_and_print(
        get_state(ctx), "GET", f"/api/containers/{container_id}/network/diagnostics",
    ))


def monitors(ctx: typer.Context) -> None:
    """
    List monitoring processes.
    """
    run_command(request_and_print(get_state(ctx), "GET", "/api/monitors/processes"))


def activity(
    ctx: typer.Context,
    limit: Optional[int] = typer.Argument(None, min=1, help="Number of entries (default 50)"),
) -> None:
    """
    Show the activity feed.
    """
    state = get_state(ctx)
    limit = limit or state.config.defaults.activity_limit
    logger.info("Getting activity feed", limit=limit)
    run_command(request_and_print(state, "GET", "/api/activity", params={"limit": limit}))


def register(app: typer.Typer) -> None:
    app.command("network")(network)
    app.command("network-diag")(network_diag)
    app.command("monitors")(monitors)
    app.command("activity")(activity)
