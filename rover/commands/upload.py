"""Implementation of the ``rover upload`` command.

This is the only place that turns rover errors into an exit status.
Components raise; the steps below catch, report and return ``1``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from rover.archive import read_archive
from rover.commands._helpers import (
    console,
    detect_host_name,
    detect_os,
    print_missing_configuration,
)
from rover.config import UploadSettings, load_upload_settings, resolve_credentials
from rover.content_type import detect_content_type
from rover.exceptions import (
    ConfigurationError,
    FileAccessError,
    LoggingInfraError,
    MissingConfigurationError,
)
from rover.models import ObjectDestination, UploadOutcome
from rover.progress import ProgressReporter
from rover.run_log import run_log
from rover.s3_utils import build_object_key, make_s3_client
from rover.uploader import perform_upload

if TYPE_CHECKING:
    import argparse
    from collections.abc import Mapping
    from pathlib import Path


def run_upload(
    args: argparse.Namespace,
    environ: Mapping[str, str],
    *,
    base_dir: Path | None = None,
) -> int:
    """Run the ``upload`` command and return the process exit status.

    *environ* is the single environment snapshot for the run.  *base_dir*
    is where the ``<host>/log`` directory is created (default: cwd).
    """
    try:
        host_name = detect_host_name()
    except OSError as e:
        logger.error(f"Cannot get system hostname with error {e}")
        return 1

    try:
        settings = load_upload_settings(environ)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    archive_file = args.file or settings.archive_file

    try:
        with run_log(
            host_name,
            settings.log_file,
            base_dir=base_dir,
            level=settings.log_level,
        ):
            return _upload_with_log(host_name, archive_file, settings, environ)
    except LoggingInfraError as e:
        logger.error(str(e))
        return 1


def _upload_with_log(
    host_name: str,
    archive_file: str,
    settings: UploadSettings,
    environ: Mapping[str, str],
) -> int:
    """Steps that run once the run log is open."""
    logger.info(f"upload: hello from the upload command at {host_name}")
    detected_os = detect_os()
    logger.info(f"upload: detected OS {detected_os}")

    try:
        request = resolve_credentials(environ)
    except MissingConfigurationError as e:
        logger.error(f"upload: {e}")
        print_missing_configuration(e)
        return 1
    request = request.model_copy(
        update={
            "archive_file": archive_file,
            "host_name": host_name,
            "detected_os": detected_os,
        }
    )

    try:
        payload = read_archive(request.archive_file)
    except FileAccessError as e:
        logger.error(f"upload: {e}")
        return 1

    content_type = detect_content_type(payload.content)
    if not request.prefix:
        logger.warning("upload: AWS_PREFIX is empty, object key will start with '/'")
    destination = ObjectDestination(
        bucket=request.bucket,
        key=build_object_key(request.prefix, payload.base_name),
    )
    logger.info(
        f"upload: {payload.base_name} ({payload.length} bytes, {content_type}) "
        f"-> {destination.format_uri()}"
    )

    try:
        s3_client = make_s3_client(request)
    except ConfigurationError as e:
        logger.error(f"upload: {e}")
        return 1

    progress = ProgressReporter(
        settings.spinner_text,
        spinner=settings.spinner,
        style=settings.spinner_style,
        final_message=f"Success! Uploaded {destination.format_uri()}",
        console=console,
    )
    outcome = perform_upload(s3_client, destination, payload, content_type, progress)
    _report_outcome(outcome)
    return outcome.exit_code


def _report_outcome(outcome: UploadOutcome) -> None:
    """Log the final result of the run."""
    uri = f"s3://{outcome.bucket}/{outcome.key}"
    if outcome.succeeded:
        logger.info(f"upload: uploaded {uri}")
    else:
        logger.error(f"upload: upload to {uri} failed: {outcome.error_detail}")
