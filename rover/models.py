"""Pydantic models for a single upload run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# ------------------------------------------------------------------
# Request side
# ------------------------------------------------------------------


class UploadRequest(BaseModel):
    """Credentials, target and host context for one upload invocation."""

    access_key: str
    secret_key: str
    session_token: str = ""
    region: str
    bucket: str
    prefix: str = ""
    archive_file: str = ""
    host_name: str = ""
    detected_os: str = ""


class ArchivePayload(BaseModel):
    """Archive content loaded fully into memory.

    ``length`` is the size reported by ``fstat`` when the file was read;
    ``content`` always has exactly that many bytes.
    """

    model_config = ConfigDict(frozen=True)

    content: bytes
    length: int
    base_name: str


class ObjectDestination(BaseModel):
    """Bucket and key the archive is stored under."""

    model_config = ConfigDict(frozen=True)

    bucket: str
    key: str

    def format_uri(self) -> str:
        """Return ``s3://bucket/key`` for display."""
        return f"s3://{self.bucket}/{self.key}"


# ------------------------------------------------------------------
# Result side
# ------------------------------------------------------------------


class UploadOutcome(BaseModel):
    """Result of the single PUT attempt."""

    succeeded: bool
    error_detail: str | None = None
    bucket: str
    key: str

    @property
    def exit_code(self) -> int:
        """Process exit status for this outcome."""
        return 0 if self.succeeded else 1
