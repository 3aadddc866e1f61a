"""Custom exception hierarchy for rover.

All rover-specific exceptions inherit from ``RoverError`` so the command
layer can catch ``except RoverError`` and map any failure to an exit code.
"""

from __future__ import annotations


class RoverError(Exception):
    """Base exception for all rover errors."""


class ConfigurationError(RoverError):
    """Raised when the run configuration is unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required environment variables are unset or empty."""

    def __init__(self, missing: list[tuple[str, str]]) -> None:
        """Initialize with ``(variable, description)`` pairs for missing vars."""
        self.missing = missing
        super().__init__(
            "One or more required environment variables are not set: "
            f"{', '.join(self.names)}"
        )

    @property
    def names(self) -> list[str]:
        """Names of the missing variables, in declaration order."""
        return [name for name, _ in self.missing]

    def rows(self) -> list[tuple[str, str]]:
        """Two-column ``(variable, description)`` rows for operator display."""
        return list(self.missing)


class FileAccessError(RoverError):
    """Raised when the local archive cannot be opened, stat-ed, read or closed."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize with the archive path and an operator-facing message."""
        self.path = path
        super().__init__(message)


class FileOpenError(FileAccessError):
    """Raised when the archive file cannot be opened."""


class FileStatError(FileAccessError):
    """Raised when the archive file size cannot be determined."""


class FileReadError(FileAccessError):
    """Raised when the archive content cannot be fully read."""


class FileCloseError(FileAccessError):
    """Raised when closing the archive file handle fails."""


class UploadServiceError(RoverError):
    """Raised when the PUT to object storage fails in transport or service."""


class LoggingInfraError(RoverError):
    """Raised when the run log directory or file cannot be set up."""
