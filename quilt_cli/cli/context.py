"""
Command Context.

CliState is the explicit configuration every command receives through
typer's context object. run_command() is the single place where client
exceptions become an exit status.
"""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any

import httpx
import typer
from pydantic import ValidationError

from quilt_cli.cli.client import APIClient
from quilt_cli.cli.output import print_error, print_response
from quilt_cli.core.config import Settings
from quilt_cli.core.config_schema import ClientConfig
from quilt_cli.core.exceptions import QuiltError, UsageError
from quilt_cli.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CliState:
    """
    Per-invocation configuration.

    settings and config are filled by the root callback unless supplied up
    front. transport is only set by tests.
    """

    settings: Settings | None = None
    config: ClientConfig | None = None
    transport: httpx.AsyncBaseTransport | None = None

    def client(self) -> APIClient:
        """Create an API client bound to this invocation's settings."""
        config = self.config or ClientConfig()
        return APIClient(self.settings or Settings(), config.client, transport=self.transport)


def get_state(ctx: typer.Context) -> CliState:
    return ctx.ensure_object(CliState)


def non_empty(value: str) -> str:
    """Argument callback rejecting an empty string before any request is built."""
    if not value:
        raise typer.BadParameter("must not be empty")
    return value


def validation_usage_error(error: ValidationError) -> UsageError:
    """Summarize a request-body ValidationError as a usage error."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'value'}: {item['msg']}"
        for item in error.errors()
    )
    return UsageError(f"Invalid {error.title} request: {details}")


def run_command(coro: Coroutine[Any, Any, None]) -> None:
    """
    Run a command coroutine to completion.

    Raises:
        typer.Exit: With code 1 if the command raised a QuiltError or built
            an invalid request body.
    """
    try:
        asyncio.run(coro)
    except ValidationError as e:
        error = validation_usage_error(e)
        logger.debug("Invalid request body", error=error.message)
        print_error(error)
        raise typer.Exit(1) from e
    except QuiltError as e:
        logger.debug("Command failed", code=e.code, error=e.message)
        print_error(e)
        raise typer.Exit(1) from e


async def request_and_print(state: CliState, method: str, path: str, **kwargs: Any) -> None:
    """Send one request and print its body."""
    async with state.client() as client:
        response = await client.request(method, path, **kwargs)
    print_response(response)
