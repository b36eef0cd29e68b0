"""
Output Formatting.

Response bodies go to stdout, pretty-printed when they parse as JSON and
verbatim otherwise. Status lines and errors go to stderr so stdout can be
piped into jq or a file.
"""

import json
import sys
from typing import Any

import httpx
from rich.console import Console
from rich.markup import escape

from quilt_cli.core.exceptions import APIError, QuiltError, UsageError

console = Console()
err_console = Console(stderr=True)


def print_data(data: Any) -> None:
    """Print a JSON-serializable value as indented JSON."""
    console.print_json(data=data, indent=2)


def print_response(response: httpx.Response) -> None:
    """Print a response body. Empty bodies print nothing."""
    text = response.text
    if not text.strip():
        return
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        console.out(text, highlight=False)
        return
    print_data(data)


def write_bytes(data: bytes) -> None:
    """Write raw bytes to stdout, bypassing text encoding."""
    stream = sys.stdout.buffer
    stream.write(data)
    stream.flush()


def info(message: str) -> None:
    err_console.print(f"[blue][INFO][/blue] {escape(message)}", highlight=False, soft_wrap=True)


def success(message: str) -> None:
    err_console.print(f"[green][OK][/green] {escape(message)}", highlight=False, soft_wrap=True)


def warn(message: str) -> None:
    err_console.print(f"[yellow][WARN][/yellow] {escape(message)}", highlight=False, soft_wrap=True)


def print_error(error: QuiltError) -> None:
    """
    Report a failed command on stderr.

    APIError bodies are printed verbatim after the summary line.
    """
    err_console.print(f"[red][ERROR][/red] {escape(error.message)}", highlight=False, soft_wrap=True)
    if isinstance(error, APIError) and error.body:
        err_console.out(error.body, highlight=False)
    if isinstance(error, UsageError) and error.usage:
        err_console.out(f"Usage: {error.usage}", highlight=False)
