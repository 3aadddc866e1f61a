"""Shared pytest fixtures for rover tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest
from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

ZIP_BYTES = b"PK\x03\x04" + b"\x14\x00\x00\x00\x08\x00" + bytes(range(64))


@pytest.fixture
def aws_env(tmp_path: Path) -> dict[str, str]:
    """A complete, valid environment snapshot for an upload run."""
    return {
        "AWS_ACCESS_KEY_ID": "AKIATESTKEY",
        "AWS_SECRET_ACCESS_KEY": "test-secret",
        "AWS_BUCKET": "retention-bucket",
        "AWS_REGION": "eu-west-1",
        "AWS_PREFIX": "backups",
        "ROVER_CONFIG": str(tmp_path / "no-such-config.yaml"),
    }


@pytest.fixture
def zip_archive(tmp_path: Path) -> Path:
    """A small file starting with ZIP magic bytes."""
    path = tmp_path / "test.zip"
    path.write_bytes(ZIP_BYTES)
    return path


@pytest.fixture
def fake_s3_client() -> MagicMock:
    """Mock S3 client whose put_object succeeds."""
    client = MagicMock()
    client.put_object.return_value = {"ETag": '"abc123"'}
    return client


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages at WARNING and above."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(str(msg)), level="WARNING")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
