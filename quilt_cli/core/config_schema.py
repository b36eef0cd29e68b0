"""
Configuration Schemas.

Pydantic models defining the structure of the optional settings file.
Used by load_client_config() to validate configuration at load time. If the
YAML file has unknown keys or wrong types, a clear error is raised at
startup instead of a cryptic KeyError deep in a command.

Every key has a default, so an absent file yields a fully populated
ClientConfig.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


DEFAULT_SYNC_EXCLUDES = [
    "node_modules",
    ".git",
    "dist",
    ".pnpm-store",
    "__pycache__",
    ".venv",
    "*.pyc",
]


# =============================================================================
# client
# =============================================================================


class ClientSchema(_StrictBase):
    connect_timeout: float = Field(default=10.0, gt=0)
    restart_delay: float = Field(default=2.0, ge=0)


class DefaultsSchema(_StrictBase):
    logs_limit: int = Field(default=100, gt=0)
    activity_limit: int = Field(default=50, gt=0)
    exec_timeout_ms: int | None = Field(default=None, gt=0)


class TerminalSchema(_StrictBase):
    cols: int = Field(default=120, gt=0)
    rows: int = Field(default=30, gt=0)
    shell: str = "/bin/bash"


class SyncSchema(_StrictBase):
    excludes: list[str] = Field(default_factory=lambda: list(DEFAULT_SYNC_EXCLUDES))


# =============================================================================
# logging
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool = True


class FileHandlerSchema(_StrictBase):
    enabled: bool = False
    path: str = "~/.local/state/quilt/client.jsonl"
    max_bytes: int = 10485760
    backup_count: int = 5


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema = Field(default_factory=ConsoleHandlerSchema)
    file: FileHandlerSchema = Field(default_factory=FileHandlerSchema)


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json"] = "console"
    handlers: HandlersSchema = Field(default_factory=HandlersSchema)

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


# =============================================================================
# settings.yaml
# =============================================================================


class ClientConfig(_StrictBase):
    client: ClientSchema = Field(default_factory=ClientSchema)
    defaults: DefaultsSchema = Field(default_factory=DefaultsSchema)
    terminal: TerminalSchema = Field(default_factory=TerminalSchema)
    sync: SyncSchema = Field(default_factory=SyncSchema)
    logging: LoggingSchema = Field(default_factory=LoggingSchema)
