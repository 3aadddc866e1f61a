"""rover -- upload diagnostic archives to S3."""

from rover.archive import read_archive
from rover.config import UploadSettings, load_upload_settings, resolve_credentials
from rover.content_type import detect_content_type
from rover.exceptions import (
    ConfigurationError,
    FileAccessError,
    FileCloseError,
    FileOpenError,
    FileReadError,
    FileStatError,
    LoggingInfraError,
    MissingConfigurationError,
    RoverError,
    UploadServiceError,
)
from rover.models import (
    ArchivePayload,
    ObjectDestination,
    UploadOutcome,
    UploadRequest,
)
from rover.s3_utils import build_object_key, make_s3_client
from rover.uploader import perform_upload, upload_archive

__all__ = [
    "ArchivePayload",
    "ConfigurationError",
    "FileAccessError",
    "FileCloseError",
    "FileOpenError",
    "FileReadError",
    "FileStatError",
    "LoggingInfraError",
    "MissingConfigurationError",
    "ObjectDestination",
    "RoverError",
    "UploadOutcome",
    "UploadRequest",
    "UploadServiceError",
    "UploadSettings",
    "build_object_key",
    "detect_content_type",
    "load_upload_settings",
    "make_s3_client",
    "perform_upload",
    "read_archive",
    "resolve_credentials",
    "upload_archive",
]
