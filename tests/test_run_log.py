"""Tests for the per-run log file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from loguru import logger

from rover.exceptions import LoggingInfraError
from rover.run_log import get_log_path, run_log

if TYPE_CHECKING:
    from pathlib import Path


def test_log_path_is_host_scoped(tmp_path: Path) -> None:
    assert get_log_path("web-01", "rover.log", tmp_path) == (
        tmp_path / "web-01" / "log" / "rover.log"
    )


def test_creates_directory_and_writes(tmp_path: Path) -> None:
    with run_log("web-01", base_dir=tmp_path) as log_path:
        logger.info("upload: hello from the upload command at web-01")
        logger.warning("upload: something odd")

    text = log_path.read_text(encoding="utf-8")
    assert "[INFO] rover: upload: hello from the upload command at web-01" in text
    assert "[WARNING] rover: upload: something odd" in text


def test_appends_across_runs(tmp_path: Path) -> None:
    with run_log("web-01", base_dir=tmp_path):
        logger.info("first run")
    with run_log("web-01", base_dir=tmp_path) as log_path:
        logger.info("second run")

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("first run")
    assert lines[1].endswith("second run")


def test_sink_removed_after_block(tmp_path: Path) -> None:
    with run_log("web-01", base_dir=tmp_path) as log_path:
        logger.info("inside")
    logger.info("outside")

    assert "outside" not in log_path.read_text(encoding="utf-8")


def test_below_level_not_written(tmp_path: Path) -> None:
    with run_log("web-01", base_dir=tmp_path, level="WARNING") as log_path:
        logger.info("chatty")
        logger.error("upload: boom")

    text = log_path.read_text(encoding="utf-8")
    assert "chatty" not in text
    assert "[ERROR] rover: upload: boom" in text


def test_directory_creation_failure(tmp_path: Path) -> None:
    # A regular file where the host directory should be.
    (tmp_path / "web-01").write_text("", encoding="utf-8")

    with pytest.raises(LoggingInfraError, match="Cannot create log directory"):
        with run_log("web-01", base_dir=tmp_path):
            pass


def test_open_failure(tmp_path: Path) -> None:
    (tmp_path / "web-01" / "log" / "rover.log").mkdir(parents=True)

    with pytest.raises(LoggingInfraError, match="Failed to open log file"):
        with run_log("web-01", base_dir=tmp_path):
            pass
