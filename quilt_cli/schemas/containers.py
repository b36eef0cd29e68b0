"""
Container Schemas.

Request bodies for container lifecycle and exec endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field

from quilt_cli.schemas.base import RequestModel, b64encode_text

SHELL_PREFIX = ["/bin/sh", "-c"]


class ContainerCreate(RequestModel):
    """Body for POST /api/containers."""

    name: str = Field(..., min_length=1, description="Container name")
    command: list[str] | None = Field(
        default=None,
        description="Entrypoint argv, always wrapped as /bin/sh -c <cmd>",
    )

    @classmethod
    def from_shell(cls, name: str, cmd: str | None = None) -> "ContainerCreate":
        """Build a create request running cmd through /bin/sh -c, if given."""
        command = [*SHELL_PREFIX, cmd] if cmd else None
        return cls(name=name, command=command)


class ContainerRename(RequestModel):
    """Body for POST /api/containers/{id}/rename."""

    name: str = Field(..., min_length=1, description="New container name")


class Base64Command(BaseModel):
    """Command carried as base64 so the server never sees shell quoting."""

    model_config = ConfigDict(extra="forbid")

    cmd_b64: str


class ExecRequest(RequestModel):
    """
    Body for POST /api/containers/{id}/exec.

    `command` is a raw shell string, or a Base64Command for exec-b64.
    `workdir` and `timeout_ms` are omitted unless set.
    """

    command: str | Base64Command
    capture_output: bool = True
    detach: bool = False
    workdir: str | None = None
    timeout_ms: int | None = Field(default=None, gt=0)

    @classmethod
    def base64(cls, command: str, timeout_ms: int | None = None) -> "ExecRequest":
        """Build an exec-b64 request. Output is always captured, never detached."""
        return cls(
            command=Base64Command(cmd_b64=b64encode_text(command)),
            capture_output=True,
            detach=False,
            timeout_ms=timeout_ms,
        )
