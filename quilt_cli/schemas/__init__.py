# Request schemas package
#
# SCHEMA_VERSION names the server contract these bodies follow. Bump it
# together with any change to a payload shape.
from quilt_cli.schemas.base import RequestModel, b64encode_bytes, b64encode_text
from quilt_cli.schemas.containers import (
    Base64Command,
    ContainerCreate,
    ContainerRename,
    ExecRequest,
)
from quilt_cli.schemas.env import EnvironmentUpdate, parse_env_pair
from quilt_cli.schemas.terminal import TerminalSessionCreate
from quilt_cli.schemas.volumes import ArchiveUpload, FileWrite, VolumeCreate

SCHEMA_VERSION = "v1"

__all__ = [
    "SCHEMA_VERSION",
    "ArchiveUpload",
    "Base64Command",
    "ContainerCreate",
    "ContainerRename",
    "EnvironmentUpdate",
    "ExecRequest",
    "FileWrite",
    "RequestModel",
    "TerminalSessionCreate",
    "VolumeCreate",
    "b64encode_bytes",
    "b64encode_text",
    "parse_env_pair",
]
