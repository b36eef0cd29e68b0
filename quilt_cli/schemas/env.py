"""
Environment Schemas.

Request bodies for PATCH/PUT /api/containers/{id}/env.
"""

from typing import Any

from pydantic import Field

from quilt_cli.core.exceptions import ResponseFormatError, UsageError
from quilt_cli.schemas.base import RequestModel


def parse_env_pair(pair: str) -> tuple[str, str]:
    """
    Split KEY=VALUE at the first '='.

    The value may itself contain '=' and may be empty. The key may not.

    Raises:
        UsageError: If there is no '=' or the key is empty.
    """
    if "=" not in pair:
        raise UsageError(f"Invalid env pair '{pair}' (expected KEY=VALUE)")
    key, value = pair.split("=", 1)
    if not key:
        raise UsageError(f"Invalid env key in '{pair}'")
    return key, value


class EnvironmentUpdate(RequestModel):
    """
    Full or partial environment map. PATCH merges it, PUT replaces.

    Values parsed from KEY=VALUE are strings. Values read back from the
    server are kept as they are.
    """

    environment: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict:
        """Serialize without dropping null values inside the map."""
        return self.model_dump(mode="json")

    @classmethod
    def from_pairs(cls, pairs: list[str]) -> "EnvironmentUpdate":
        """Build from KEY=VALUE arguments. A repeated key keeps its last value."""
        environment: dict[str, str] = {}
        for pair in pairs:
            key, value = parse_env_pair(pair)
            environment[key] = value
        return cls(environment=environment)

    @classmethod
    def without_key(cls, current: dict[str, Any], key: str) -> "EnvironmentUpdate":
        """
        Drop `key` from an env-get response body.

        A missing or null `environment` is treated as empty. The remaining
        entries are sent back unchanged.
        """
        environment = current.get("environment") or {}
        if not isinstance(environment, dict):
            raise ResponseFormatError("Response field 'environment' is not an object")
        return cls(environment={
            name: value for name, value in environment.items() if name != key
        })
