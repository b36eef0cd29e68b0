"""
Local File Helpers.

Reading files to upload and packing directories into gzip tarballs.
Everything is held in memory; payload size is bounded by available RAM.
"""

import fnmatch
import io
import tarfile
from pathlib import Path

from quilt_cli.core.exceptions import UsageError


def read_local_file(path: str | Path, kind: str = "Local file") -> bytes:
    """
    Read a local file fully.

    Raises:
        UsageError: If path is not an existing regular file.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise UsageError(f"{kind} not found: {path}")
    return file_path.read_bytes()


def _is_excluded(name: str, excludes: list[str]) -> bool:
    base = name.rsplit("/", 1)[-1]
    return any(fnmatch.fnmatchcase(base, pattern) for pattern in excludes)


def build_directory_archive(local_dir: str | Path, excludes: list[str]) -> bytes:
    """
    Pack a directory into a .tar.gz, entries rooted at "./".

    An entry is skipped when its base name matches any exclude pattern.
    Skipping a directory skips everything under it.

    Raises:
        UsageError: If local_dir is not an existing directory.
    """
    directory = Path(local_dir)
    if not directory.is_dir():
        raise UsageError(f"Local directory not found: {local_dir}")

    def _filter(info: tarfile.TarInfo) -> tarfile.TarInfo | None:
        if info.name != "." and _is_excluded(info.name, excludes):
            return None
        return info

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        tar.add(str(directory), arcname=".", filter=_filter)
    return buffer.getvalue()


def format_megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.1f}MB"
