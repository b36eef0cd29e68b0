"""
Terminal Schemas.

Request body for POST /api/terminal/sessions.
"""

from typing import Literal

from pydantic import Field

from quilt_cli.schemas.base import RequestModel


class TerminalSessionCreate(RequestModel):
    """Open an interactive shell channel into a container."""

    target: Literal["container"] = "container"
    container_id: str = Field(..., min_length=1)
    cols: int = Field(default=120, gt=0)
    rows: int = Field(default=30, gt=0)
    shell: str = "/bin/bash"
