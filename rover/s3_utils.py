"""S3 helpers: object key construction and client creation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from rover.exceptions import ConfigurationError

if TYPE_CHECKING:
    from rover.models import UploadRequest
    from rover.s3_types import S3Client

# A single PUT per run: botocore counts the first request as an attempt.
_NO_RETRY_CONFIG = Config(retries={"total_max_attempts": 1, "mode": "standard"})


def build_object_key(prefix: str, base_name: str) -> str:
    """Construct the S3 object key for an uploaded archive.

    Always returns ``prefix/base_name``.  An empty *prefix* yields a key
    with a leading ``/``; callers that care should warn about it.
    """
    return f"{prefix}/{base_name}"


def make_s3_client(request: UploadRequest) -> S3Client:
    """Create a boto3 S3 client from the static credentials in *request*.

    Raises
    ------
    ConfigurationError
        When botocore rejects the session or client settings (e.g. a
        malformed region name).

    """
    try:
        session = boto3.Session(
            aws_access_key_id=request.access_key,
            aws_secret_access_key=request.secret_key,
            aws_session_token=request.session_token or None,
            region_name=request.region,
        )
        client: S3Client = session.client("s3", config=_NO_RETRY_CONFIG)
    except BotoCoreError as e:
        raise ConfigurationError(f"Cannot create S3 client: {e}") from e
    return client
