"""
Volume Commands.

Manage persistent volumes and the files inside them.
"""

import base64
import binascii
from typing import Optional

import typer

from quilt_cli.cli.archive import read_local_file
from quilt_cli.cli.client import response_object
from quilt_cli.cli.commands.files import upload_archive
from quilt_cli.cli.context import CliState, get_state, non_empty, request_and_print, run_command
from quilt_cli.cli.output import write_bytes
from quilt_cli.core.exceptions import ResponseFormatError
from quilt_cli.core.logging import get_logger
from quilt_cli.schemas import FileWrite, VolumeCreate

logger = get_logger(__name__)


def _volume_path(name: str, suffix: str = "") -> str:
    return f"/api/volumes/{name}{suffix}"


def _trim_leading_slash(path: str) -> str:
    return path.lstrip("/")


def volumes(ctx: typer.Context) -> None:
    """
    List volumes.
    """
    logger.info("Listing volumes")
    run_command(request_and_print(get_state(ctx), "GET", "/api/volumes"))


def volume_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
    labels_json: Optional[str] = typer.Argument(None, help='Labels as a JSON object, e.g. \'{"team":"web"}\''),
) -> None:
    """
    Create a volume (local driver).
    """
    run_command(_volume_create(get_state(ctx), name, labels_json))


async def _volume_create(state: CliState, name: str, labels_json: str | None) -> None:
    body = VolumeCreate.from_cli(name, labels_json)
    logger.info("Creating volume", name=name)
    await request_and_print(state, "POST", "/api/volumes", json=body.to_payload())


def volume_get(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
) -> None:
    """
    Get volume details.
    """
    run_command(request_and_print(get_state(ctx), "GET", _volume_path(name)))


def volume_delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
) -> None:
    """
    Delete a volume.
    """
    logger.info("Deleting volume", name=name)
    run_command(request_and_print(get_state(ctx), "DELETE", _volume_path(name)))


def volume_ls(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
    path: Optional[str] = typer.Argument(None, help="Directory inside the volume"),
) -> None:
    """
    List files in a volume.
    """
    endpoint = _volume_path(name, "/ls")
    if path:
        endpoint = f"{endpoint}/{_trim_leading_slash(path)}"
    logger.info("Listing volume files", name=name, path=path)
    run_command(request_and_print(get_state(ctx), "GET", endpoint))


def volume_upload(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
    archive: str = typer.Argument(..., callback=non_empty, help="Local .tar.gz archive"),
    target_path: str = typer.Argument("/", help="Extraction directory in the volume"),
    strip_components: int = typer.Argument(0, min=0, help="Leading path elements to strip"),
) -> None:
    """
    Upload and extract an archive into a volume.
    """
    run_command(_volume_upload(get_state(ctx), name, archive, target_path, strip_components))


async def _volume_upload(
    state: CliState,
    name: str,
    archive: str,
    target_path: str,
    strip_components: int,
) -> None:
    data = read_local_file(archive, kind="Archive file")
    await upload_archive(state, _volume_path(name, "/archive"), data, target_path, strip_components)


def volume_put(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
    local_file: str = typer.Argument(..., callback=non_empty, help="Local file to upload"),
    remote_path: str = typer.Argument(..., callback=non_empty, help="Destination path inside the volume"),
) -> None:
    """
    Upload a single file to a volume.
    """
    run_command(_volume_put(get_state(ctx), name, local_file, remote_path))


async def _volume_put(state: CliState, name: str, local_file: str, remote_path: str) -> None:
    data = read_local_file(local_file)
    body = FileWrite.from_bytes(remote_path, data)
    logger.info("Uploading file to volume", name=name, path=remote_path, size=len(data))
    await request_and_print(state, "POST", _volume_path(name, "/files"), json=body.to_payload())


def volume_cat(
    ctx: typer.Context,
    name: str = typer.Argument(..., callback=non_empty, help="Volume name"),
    remote_path: str = typer.Argument(..., callback=non_empty, help="File path inside the volume"),
) -> None:
    """
    Print a file from a volume to stdout, decoded.
    """
    run_command(_volume_cat(get_state(ctx), name, remote_path))


async def _volume_cat(state: CliState, name: str, remote_path: str) -> None:
    logger.info("Getting file from volume", name=name, path=remote_path)
    async with state.client() as client:
        response = await client.get(_volume_path(name, f"/files/{_trim_leading_slash(remote_path)}"))

    content = response_object(response).get("content")
    if not isinstance(content, str):
        raise ResponseFormatError("Response has no 'content' field")
    try:
        data = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ResponseFormatError(f"File content is not valid base64: {e}") from e
    write_bytes(data)


def register(app: typer.Typer) -> None:
    app.command("volumes")(volumes)
    app.command("volume-create")(volume_create)
    app.command("volume-get")(volume_get)
    app.command("volume-delete")(volume_delete)
    app.command("volume-ls")(volume_ls)
    app.command("volume-upload")(volume_upload)
    app.command("volume-put")(volume_put)
    app.command("volume-cat")(volume_cat)
