"""Load the local archive file into memory.

The whole file is buffered: ``read_archive`` is the only place that touches
the file, so a streaming reader can replace it without changing callers.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from loguru import logger

from rover.exceptions import (
    FileCloseError,
    FileOpenError,
    FileReadError,
    FileStatError,
)
from rover.models import ArchivePayload


def read_archive(path: str | Path) -> ArchivePayload:
    """Open *path*, stat it, and read exactly the reported number of bytes.

    The file handle is closed exactly once on every exit path.  A failed
    close is raised as ``FileCloseError`` even when the read succeeded.

    Raises
    ------
    FileOpenError, FileStatError, FileReadError, FileCloseError
        All subclasses of ``FileAccessError``.

    """
    archive_path = Path(path)
    try:
        fh = archive_path.open("rb")
    except OSError as e:
        raise FileOpenError(
            str(archive_path), f"Error opening {archive_path}! Error: {e}"
        ) from e

    try:
        payload = _load(fh, archive_path)
    finally:
        try:
            fh.close()
        except OSError as e:
            raise FileCloseError(
                str(archive_path), f"Could not close {archive_path}! Error: {e}"
            ) from e

    logger.debug(f"Read {payload.length} bytes from {archive_path}")
    return payload


def _load(fh: BinaryIO, archive_path: Path) -> ArchivePayload:
    """Read the full content of an already opened archive."""
    try:
        size = os.fstat(fh.fileno()).st_size
    except OSError as e:
        raise FileStatError(
            str(archive_path), f"Could not stat file {archive_path}! Error: {e}"
        ) from e

    try:
        content = fh.read(size)
    except OSError as e:
        raise FileReadError(
            str(archive_path), f"Could not read {archive_path}! Error: {e}"
        ) from e

    if len(content) != size:
        raise FileReadError(
            str(archive_path),
            f"Could not read {archive_path}! "
            f"Error: expected {size} bytes, got {len(content)}",
        )

    return ArchivePayload(content=content, length=size, base_name=archive_path.name)
