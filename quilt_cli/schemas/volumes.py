"""
Volume and File Schemas.

Request bodies for volume management and the archive/file upload
endpoints shared by containers and volumes.
"""

import json
from typing import Any

from pydantic import Field

from quilt_cli.core.exceptions import UsageError
from quilt_cli.schemas.base import RequestModel, b64encode_bytes

DEFAULT_FILE_MODE = 644


class VolumeCreate(RequestModel):
    """Body for POST /api/volumes."""

    name: str = Field(..., min_length=1)
    driver: str = "local"
    labels: dict[str, Any] | None = None

    @classmethod
    def from_cli(cls, name: str, labels_json: str | None = None) -> "VolumeCreate":
        """
        Build from CLI arguments. labels_json must decode to a JSON object.

        Raises:
            UsageError: If labels_json is not a JSON object.
        """
        labels = None
        if labels_json:
            try:
                labels = json.loads(labels_json)
            except json.JSONDecodeError as e:
                raise UsageError(f"Invalid labels JSON: {e}") from e
            if not isinstance(labels, dict):
                raise UsageError("Labels must be a JSON object")
        return cls(name=name, labels=labels)


class ArchiveUpload(RequestModel):
    """
    Body for POST /api/containers/{id}/archive and /api/volumes/{name}/archive.

    The server extracts the tarball under `path`, dropping `strip_components`
    leading path elements from each entry.
    """

    content: str
    strip_components: int = Field(default=0, ge=0)
    path: str = "/"

    @classmethod
    def from_bytes(cls, data: bytes, path: str = "/", strip_components: int = 0) -> "ArchiveUpload":
        return cls(
            content=b64encode_bytes(data),
            strip_components=strip_components,
            path=path,
        )


class FileWrite(RequestModel):
    """Body for POST /api/volumes/{name}/files."""

    path: str = Field(..., min_length=1)
    content: str
    mode: int = DEFAULT_FILE_MODE

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> "FileWrite":
        return cls(path=path, content=b64encode_bytes(data))
