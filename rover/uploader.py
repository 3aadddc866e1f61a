"""Single-request upload of a buffered archive to S3."""

from __future__ import annotations

from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from rover.exceptions import UploadServiceError
from rover.models import UploadOutcome

if TYPE_CHECKING:
    from rover.models import ArchivePayload, ObjectDestination
    from rover.progress import ProgressReporter
    from rover.s3_types import S3Client


def upload_archive(
    s3_client: S3Client,
    destination: ObjectDestination,
    payload: ArchivePayload,
    content_type: str,
) -> None:
    """PUT the whole *payload* to *destination* in one request.

    No chunking, no multipart, no retries.

    Raises
    ------
    UploadServiceError
        On any transport or service failure, with the botocore message.

    """
    try:
        s3_client.put_object(
            Bucket=destination.bucket,
            Key=destination.key,
            Body=payload.content,
            ContentLength=payload.length,
            ContentType=content_type,
        )
    except (BotoCoreError, ClientError) as e:
        raise UploadServiceError(f"Error: {e} from AWS!") from e


def perform_upload(
    s3_client: S3Client,
    destination: ObjectDestination,
    payload: ArchivePayload,
    content_type: str,
    progress: ProgressReporter,
) -> UploadOutcome:
    """Upload with the spinner running and return the outcome.

    The spinner is stopped before this returns, whatever the result.
    """
    logger.debug(
        f"PUT {destination.format_uri()} "
        f"({payload.length} bytes, {content_type})"
    )
    try:
        with progress:
            upload_archive(s3_client, destination, payload, content_type)
    except UploadServiceError as e:
        return UploadOutcome(
            succeeded=False,
            error_detail=str(e),
            bucket=destination.bucket,
            key=destination.key,
        )
    return UploadOutcome(succeeded=True, bucket=destination.bucket, key=destination.key)
