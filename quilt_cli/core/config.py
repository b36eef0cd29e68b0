"""
Configuration Management.

Credentials and the API base URL come from the process environment.
Client tunables come from an optional YAML settings file.

Environment (QUILT_ prefix):
    QUILT_API_URL   API base URL (default https://backend.quilt.sh)
    QUILT_TOKEN     JWT bearer token
    QUILT_API_KEY   API key, used only when no token is set
    QUILT_CONFIG    Path to a settings file

Settings file (YAML):
    $QUILT_CONFIG, else ~/.config/quilt/settings.yaml when it exists.
    See config/settings.example.yaml for every key and its default.

Both are loaded once per invocation and handed to the API client
explicitly. Nothing here is cached at module level.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quilt_cli.core.config_schema import ClientConfig
from quilt_cli.core.exceptions import ConfigError

DEFAULT_API_URL = "https://backend.quilt.sh"
DEFAULT_CONFIG_PATH = Path("~/.config/quilt/settings.yaml")


class Settings(BaseSettings):
    """Secrets and endpoint loaded from QUILT_* environment variables."""

    api_url: str = DEFAULT_API_URL
    token: str = ""
    api_key: str = ""
    config: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="QUILT_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_url", mode="before")
    @classmethod
    def _default_when_empty(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_API_URL
        return value

    @property
    def auth_method(self) -> str | None:
        """Which credential will be sent: 'token', 'api_key', or None."""
        if self.token:
            return "token"
        if self.api_key:
            return "api_key"
        return None


def load_settings() -> Settings:
    """Read settings from the current process environment."""
    return Settings()


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load a YAML settings file. An empty file yields an empty dict."""
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Invalid configuration in {path}: expected a mapping")
    return data


def resolve_config_path(settings: Settings) -> Path | None:
    """
    Find the settings file to load.

    An explicit QUILT_CONFIG must exist. The default location is optional.
    """
    if settings.config:
        return Path(settings.config).expanduser()

    default = DEFAULT_CONFIG_PATH.expanduser()
    if default.exists():
        return default
    return None


def load_client_config(path: Path | None = None) -> ClientConfig:
    """
    Load and validate client tunables.

    Args:
        path: Settings file. If None, all defaults are used.

    Returns:
        Validated ClientConfig.

    Raises:
        ConfigError: If the file is missing, not YAML, or fails validation.
    """
    if path is None:
        return ClientConfig()

    raw = load_yaml_config(path)
    try:
        return ClientConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{e}") from e
