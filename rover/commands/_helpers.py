"""Shared helpers for CLI commands."""

from __future__ import annotations

import platform
import socket

from loguru import logger
from rich.console import Console
from rich.table import Table

from rover.exceptions import MissingConfigurationError  # noqa: TC001

# Operator-facing output that is not a log line (tables, spinner).
console = Console(stderr=True)


def detect_host_name() -> str:
    """Return the system host name.

    Raises
    ------
    OSError
        When the host name cannot be determined or is empty.

    """
    host_name = socket.gethostname()
    if not host_name:
        raise OSError("empty host name")
    return host_name


def detect_os() -> str:
    """Return the running OS in lower case (``linux``, ``darwin``, ``windows``)."""
    return platform.system().lower()


def print_missing_configuration(error: MissingConfigurationError) -> None:
    """Show the missing environment variables as a two-column table."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Variable")
    table.add_column("Description")
    for name, description in error.rows():
        table.add_row(name, description)
    logger.error(
        "One or more required environment variables are not set; "
        "please ensure that the following environment variables are set:"
    )
    console.print(table)
