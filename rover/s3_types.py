"""Type definitions for S3 client interfaces."""

from __future__ import annotations

from typing import Any, Protocol


class S3Client(Protocol):
    """Structural protocol for a boto3 S3 client (subset used by rover)."""

    def put_object(
        self,
        *,
        Bucket: str,  # noqa: N803
        Key: str,  # noqa: N803
        Body: bytes,  # noqa: N803
        ContentLength: int,  # noqa: N803
        ContentType: str,  # noqa: N803
    ) -> dict[str, Any]:
        """Put an object to S3."""
        ...
