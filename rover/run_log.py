"""Per-invocation log file at ``<host>/log/<log_file>``.

The file is a loguru sink that lives only for the duration of a run.  It
must be available before any upload is attempted.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from rover.exceptions import LoggingInfraError

if TYPE_CHECKING:
    from collections.abc import Iterator

LOG_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} [{level}] rover: {message}"


def get_log_path(host_name: str, log_file: str, base_dir: Path | None = None) -> Path:
    """Return ``<base_dir>/<host_name>/log/<log_file>``."""
    root = base_dir if base_dir is not None else Path.cwd()
    return root / host_name / "log" / log_file


@contextmanager
def run_log(
    host_name: str,
    log_file: str = "rover.log",
    *,
    base_dir: Path | None = None,
    level: str = "INFO",
) -> Iterator[Path]:
    """Append log records to the host-scoped run log while the block runs.

    The sink is removed on exit, which flushes and closes the file.

    Raises
    ------
    LoggingInfraError
        When the log directory cannot be created or the file opened.

    """
    log_path = get_log_path(host_name, log_file, base_dir)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LoggingInfraError(
            f"Cannot create log directory {log_path.parent}: {e}"
        ) from e

    try:
        sink_id = logger.add(
            log_path,
            level=level,
            format=LOG_FORMAT,
            mode="a",
            encoding="utf-8",
        )
    except (OSError, ValueError) as e:
        raise LoggingInfraError(f"Failed to open log file {log_path}: {e}") from e

    try:
        yield log_path
    finally:
        logger.remove(sink_id)
