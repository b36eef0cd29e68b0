"""
Environment Variable Commands.

Read, merge and delete container environment variables. Changes apply on
the next container start.
"""

from typing import List

import typer

from quilt_cli.cli.client import response_object
from quilt_cli.cli.context import CliState, get_state, non_empty, run_command
from quilt_cli.cli.output import print_response
from quilt_cli.core.exceptions import UsageError
from quilt_cli.core.logging import get_logger
from quilt_cli.schemas import EnvironmentUpdate

logger = get_logger(__name__)

ENV_SET_USAGE = "quilt env-set <container_id> KEY=VALUE [KEY2=VALUE2 ...]"


def _env_path(container_id: str) -> str:
    return f"/api/containers/{container_id}/env"


def env_get(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Get container environment variables.
    """
    run_command(_env_get(get_state(ctx), container_id))


async def _env_get(state: CliState, container_id: str) -> None:
    logger.info("Getting environment", container_id=container_id)
    async with state.client() as client:
        response = await client.get(_env_path(container_id))
    print_response(response)


def env_set(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    pairs: List[str] = typer.Argument(..., metavar="KEY=VALUE...", help="Variables to set"),
) -> None:
    """
    Set environment variables (merged into the existing environment).

    A restart is required for a running container to see the change.
    """
    run_command(_env_set(get_state(ctx), container_id, pairs))


async def _env_set(state: CliState, container_id: str, pairs: list[str]) -> None:
    try:
        body = EnvironmentUpdate.from_pairs(pairs)
    except UsageError as e:
        e.usage = ENV_SET_USAGE
        raise

    logger.info("Setting environment", container_id=container_id, keys=sorted(body.environment))
    async with state.client() as client:
        response = await client.patch(_env_path(container_id), json=body.to_payload())
    print_response(response)


def env_delete(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    key: str = typer.Argument(..., callback=non_empty, help="Variable name"),
) -> None:
    """
    Delete an environment variable.

    Implemented as GET then PUT of the whole map. A change made by someone
    else between the two requests is overwritten.
    """
    run_command(_env_delete(get_state(ctx), container_id, key))


async def _env_delete(state: CliState, container_id: str, key: str) -> None:
    logger.info("Deleting environment variable", container_id=container_id, key=key)
    async with state.client() as client:
        current = response_object(await client.get(_env_path(container_id)))
        body = EnvironmentUpdate.without_key(current, key)
        response = await client.put(_env_path(container_id), json=body.to_payload())
    print_response(response)


def register(app: typer.Typer) -> None:
    app.command("env-get")(env_get)
    app.command("env-set")(env_set)
    app.command("env-delete")(env_delete)
