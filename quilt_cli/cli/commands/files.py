"""
Container File Commands.

Upload tarballs into a container filesystem, or pack and upload a local
directory.
"""

import typer

from quilt_cli.cli.archive import build_directory_archive, format_megabytes, read_local_file
from quilt_cli.cli.context import CliState, get_state, non_empty, request_and_print, run_command
from quilt_cli.core.logging import get_logger
from quilt_cli.schemas import ArchiveUpload

logger = get_logger(__name__)


async def upload_archive(
    state: CliState,
    path: str,
    data: bytes,
    target_path: str,
    strip_components: int,
) -> None:
    """POST a base64-encoded tarball to an archive endpoint and print the result."""
    body = ArchiveUpload.from_bytes(data, path=target_path, strip_components=strip_components)
    payload = body.to_payload()
    logger.info(
        "Uploading archive",
        endpoint=path,
        target=target_path,
        payload_size=format_megabytes(len(payload["content"])),
    )
    await request_and_print(state, "POST", path, json=payload)


def upload(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    archive: str = typer.Argument(..., callback=non_empty, help="Local .tar.gz archive"),
    target_path: str = typer.Argument("/", help="Extraction directory in the container"),
    strip_components: int = typer.Argument(0, min=0, help="Leading path elements to strip"),
) -> None:
    """
    Upload and extract an archive into a container filesystem.
    """
    run_command(_upload(get_state(ctx), container_id, archive, target_path, strip_components))


async def _upload(
    state: CliState,
    container_id: str,
    archive: str,
    target_path: str,
    strip_components: int,
) -> None:
    data = read_local_file(archive, kind="Archive file")
    await upload_archive(
        state, f"/api/containers/{container_id}/archive", data, target_path, strip_components,
    )


def sync(
    ctx: typer.Context,
    container_id: str = typer.Argument(..., callback=non_empty, help="Container ID"),
    local_dir: str = typer.Argument(..., callback=non_empty, help="Local directory to upload"),
    target_path: str = typer.Argument("/app", help="Extraction directory in the container"),
    strip_components: int = typer.Argument(1, min=0, help="Leading path elements to strip"),
) -> None:
    """
    Pack a local directory and upload it into a container.

    node_modules, .git, dist, .pnpm-store, __pycache__, .venv and *.pyc are
    skipped by default (see sync.excludes in the settings file).
    """
    run_command(_sync(get_state(ctx), container_id, local_dir, target_path, strip_components))


async def _sync(
    state: CliState,
    container_id: str,
    local_dir: str,
    target_path: str,
    strip_components: int,
) -> None:
    logger.info("Creating archive", directory=local_dir)
    data = build_directory_archive(local_dir, state.config.sync.excludes)
    logger.info("Archive created", size=format_megabytes(len(data)))
    await upload_archive(
        state, f"/api/containers/{container_id}/archive", data, target_path, strip_components,
    )


def register(app: typer.Typer) -> None:
    app.command("upload")(upload)
    app.command("sync")(sync)
