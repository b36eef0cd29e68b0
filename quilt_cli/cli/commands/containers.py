"""
Container Commands.

Lifecycle, inspection, exec and exec-job commands for single containers.
"""

import asyncio
from typing import Any, List, Optional

import typer

from quilt_cli.cli.client import response_object
from quilt_cli.cli.context import CliState, get_state, non_empty, request_and_print, run_command
from quilt_cli.cli.output import print_data, print_response
from quilt_cli.core.exceptions import APIError, TransportError, UsageError
from quilt_cli.core.logging import get_logger
from quilt_cli.schemas import ContainerCreate, ContainerRename, ExecRequest

logger = get_logger(__name__)

# Option parsing stops at the first command word, so words such as `-lh` or
# `--detach` after it belong to the command.
COMMAND_WORDS_SETTINGS = {"allow_interspersed_args": False}

EXEC_USAGE = "quilt exec <container_id> [--timeout=<ms>] [--detach] [--workdir=<path>] [--no-capture] <command>"
EXEC_B64_USAGE = "quilt exec-b64 <container_id> [--timeout=<ms>] <command>"

# Leading words recognised as exec options: flag -> (field, value), prefix -> field.
EXEC_FLAGS = {"--detach": ("detach", True), "--no-capture": ("capture_output", False)}
EXEC_VALUES = {"--timeout=": "timeout_ms", "--workdir=": "workdir"}
EXEC_B64_VALUES = {"--timeout=": "timeout_ms"}


def _container_path(container_id: str, suffix: str = "") -> str:
    return f"/api/containers/{container_id}{suffix}"


# =============================================================================
# Listing and inspection
# =============================================================================


def list_containers(
    ctx: typer.Context,
    container_state: Optional[str] = typer.Argument(
        None, metavar="[STATE]", help="Only show containers in this state (e.g. running)",
    ),
) -> None:
    """
    List containers, optionally filtered by state.
    """
    run_command(_list(get_state(ctx), container_state))


async def _list(state: CliState, container_state: str | None) -> None:
    logger.info("Listing containers", state=container_state)
    async with state.client() as client:
        response = await client.get("/api/containers")

    if not container_state:
        print_response(response)
        return

    containers = response_object(response).get("containers") or []
    print_data({
        "containers": [
            c for c in containers
            if isinstance(c, dict) and c.get("state") == container_state
        ],
    })


def get(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Get container details.
    """
    logger.info("Getting container", container_id=container_id)
    run_command(request_and_print(get_state(ctx), "GET", _container_path(container_id)))


def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Container name"),
    command: Optional[List[str]] = typer.Argument(None, help="Command run via /bin/sh -c"),
) -> None:
    """
    Create a container, optionally with a startup command.
    """
    cmd = " ".join(command) if command else None
    run_command(_create(get_state(ctx), name, cmd))


async def _create(state: CliState, name: str, cmd: str | None) -> None:
    logger.info("Creating container", name=name)
    body = ContainerCreate.from_shell(name, cmd)
    await request_and_print(state, "POST", "/api/containers", json=body.to_payload())


def rename(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    new_name: str = typer.Argument(..., callback=non_empty, help="New container name"),
) -> None:
    """
    Rename a container.
    """
    run_command(_rename(get_state(ctx), container_id, new_name))


async def _rename(state: CliState, container_id: str, new_name: str) -> None:
    logger.info("Renaming container", container_id=container_id, new_name=new_name)
    body = ContainerRename(name=new_name)
    await request_and_print(state, "POST", _container_path(container_id, "/rename"), json=body.to_payload())


def logs(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    limit: Optional[int] = typer.Argument(None, min=1, help="Number of lines (default 100)"),
) -> None:
    """
    Get container logs.
    """
    state = get_state(ctx)
    limit = limit or state.config.defaults.logs_limit
    logger.info("Getting logs", container_id=container_id, limit=limit)
    run_command(request_and_print(
        state, "GET", _container_path(container_id, "/logs"), params={"limit": limit},
    ))


def metrics(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Get container metrics.
    """
    run_command(request_and_print(get_state(ctx), "GET", _container_path(container_id, "/metrics")))


def ready(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Readiness check.
    """
    run_command(request_and_print(get_state(ctx), "GET", _container_path(container_id, "/ready")))


# =============================================================================
# Lifecycle
# =============================================================================


def start(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Start a container.
    """
    logger.info("Starting container", container_id=container_id)
    run_command(request_and_print(get_state(ctx), "POST", _container_path(container_id, "/start")))


def stop(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Stop a container.
    """
    logger.info("Stopping container", container_id=container_id)
    run_command(request_and_print(get_state(ctx), "POST", _container_path(container_id, "/stop")))


def kill(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Force kill a container.
    """
    logger.info("Killing container", container_id=container_id)
    run_command(request_and_print(get_state(ctx), "POST", _container_path(container_id, "/kill")))


def remove(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Delete a container.
    """
    logger.info("Deleting container", container_id=container_id)
    run_command(request_and_print(get_state(ctx), "DELETE", _container_path(container_id)))


def restart(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    Restart a container (stop, wait, start).

    The stop result is ignored and the container state is not polled, so a
    slow-stopping container may receive the start request too early.
    """
    run_command(_restart(get_state(ctx), container_id))


async def _restart(state: CliState, container_id: str) -> None:
    delay = state.config.client.restart_delay
    logger.info("Restarting container", container_id=container_id, delay=delay)

    async with state.client() as client:
        try:
            await client.post(_container_path(container_id, "/stop"))
        except (APIError, TransportError) as e:
            logger.warning("Stop request failed, starting anyway", container_id=container_id, error=e.message)

        await asyncio.sleep(delay)
        response = await client.post(_container_path(container_id, "/start"))

    print_response(response)


# =============================================================================
# Exec
# =============================================================================


def parse_exec_words(
    words: list[str],
    values: dict[str, str],
    flags: dict[str, tuple[str, Any]],
    usage: str,
) -> tuple[str, dict[str, Any]]:
    """
    Split leading exec options from the command.

    Options are recognised only before the first other word, and `--` ends
    them explicitly. The remaining words are joined by single spaces. An
    empty --timeout= or --workdir= leaves the field unset.

    Raises:
        UsageError: If the timeout is not a positive integer or no command is left.
    """
    options: dict[str, Any] = {}
    index = 0
    while index < len(words):
        word = words[index]
        prefix = next((p for p in values if word.startswith(p)), None)
        if prefix is not None:
            options[values[prefix]] = word[len(prefix):] or None
        elif word in flags:
            field, value = flags[word]
            options[field] = value
        elif word == "--":
            index += 1
            break
        else:
            break
        index += 1

    timeout = options.get("timeout_ms")
    if timeout is not None:
        if not timeout.isdigit() or int(timeout) == 0:
            raise UsageError(f"Invalid timeout '{timeout}' (expected milliseconds > 0)", usage=usage)
        options["timeout_ms"] = int(timeout)

    command = " ".join(words[index:])
    if not command.strip():
        raise UsageError("Command must not be empty", usage=usage)
    return command, options


def exec_command(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    words: Optional[List[str]] = typer.Argument(
        None, metavar="[OPTIONS] COMMAND...", help="Leading options, then the command words",
    ),
) -> None:
    """
    Execute a command in a container.

    Options must come before the command:
    --timeout=<ms> (server default 30000, max 600000), --detach (check with
    jobs/job-get), --workdir=<path>, --no-capture. Use -- to end options.

    Examples:
        quilt exec <id> ls -la /app
        quilt exec <id> --timeout=5000 --detach "make build"
    """
    run_command(_exec(get_state(ctx), container_id, words or []))


async def _exec(state: CliState, container_id: str, words: list[str]) -> None:
    command, options = parse_exec_words(words, EXEC_VALUES, EXEC_FLAGS, EXEC_USAGE)
    if options.get("timeout_ms") is None:
        options["timeout_ms"] = state.config.defaults.exec_timeout_ms
    logger.info("Executing in container", container_id=container_id, command=command)
    body = ExecRequest(command=command, **options)
    await request_and_print(state, "POST", _container_path(container_id, "/exec"), json=body.to_payload())


def exec_b64(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    words: Optional[List[str]] = typer.Argument(
        None, metavar="[OPTIONS] COMMAND...", help="Leading --timeout=<ms>, then the command words",
    ),
) -> None:
    """
    Execute a command sent base64-encoded, safe for any quoting.

    The only option is --timeout=<ms>, before the command.
    """
    run_command(_exec_b64(get_state(ctx), container_id, words or []))


async def _exec_b64(state: CliState, container_id: str, words: list[str]) -> None:
    command, options = parse_exec_words(words, EXEC_B64_VALUES, {}, EXEC_B64_USAGE)
    timeout_ms = options.get("timeout_ms") or state.config.defaults.exec_timeout_ms
    logger.info("Executing (b64) in container", container_id=container_id)
    body = ExecRequest.base64(command, timeout_ms=timeout_ms)
    await request_and_print(state, "POST", _container_path(container_id, "/exec"), json=body.to_payload())


def jobs(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
) -> None:
    """
    List exec jobs started in detach mode.
    """
    run_command(request_and_print(get_state(ctx), "GET", _container_path(container_id, "/jobs")))


def job_get(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    job_id: str = typer.Argument(..., callback=non_empty, help="Exec job ID"),
    include_output: bool = typer.Argument(True, help="Include captured output (true/false)"),
) -> None:
    """
    Get exec job details.
    """
    logger.info("Getting exec job", container_id=container_id, job_id=job_id)
    run_command(request_and_print(
        get_state(ctx),
        "GET",
        _container_path(container_id, f"/jobs/{job_id}"),
        params={"include_output": include_output},
    ))


def register(app: typer.Typer) -> None:
    app.command("list")(list_containers)
    app.command("ls", hidden=True)(list_containers)
    app.command("get")(get)
    app.command("create", context_settings=COMMAND_WORDS_SETTINGS)(create)
    app.command("rename")(rename)
    app.command("start")(start)
    app.command("stop")(stop)
    app.command("restart")(restart)
    app.command("kill")(kill)
    app.command("rm")(remove)
    app.command("delete", hidden=True)(remove)
    app.command("exec", context_settings=COMMAND_WORDS_SETTINGS)(exec_command)
    app.command("run", hidden=True, context_settings=COMMAND_WORDS_SETTINGS)(exec_command)
    app.command("exec-b64", context_settings=COMMAND_WORDS_SETTINGS)(exec_b64)
    app.command("logs")(logs)
    app.command("metrics")(metrics)
    app.command("ready")(ready)
    app.command("jobs")(jobs)
    app.command("job-get")(job_get)
