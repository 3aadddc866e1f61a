"""Configuration loading.

AWS credentials come only from the environment.  Non-secret settings are
merged with priority: CLI flags > user config file > bundled preset.

Nothing in this module reads ``os.environ`` directly: callers take one
snapshot of the environment at the top of the run and pass it in.
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path
from typing import TYPE_CHECKING

import yaml
from loguru import logger
from pydantic import BaseModel, ValidationError

from rover.exceptions import ConfigurationError, MissingConfigurationError
from rover.models import UploadRequest

if TYPE_CHECKING:
    from collections.abc import Mapping

CONFIG_DIR = Path.home() / ".config" / "rover"
CONFIG_PATH = CONFIG_DIR / "config.yaml"

# Required variables, in the order they are reported when missing.
REQUIRED_ENV_VARS: dict[str, str] = {
    "AWS_ACCESS_KEY_ID": "Access key ID for AWS",
    "AWS_SECRET_ACCESS_KEY": "Secret access key ID for AWS",
    "AWS_BUCKET": "Name of the S3 bucket",
    "AWS_REGION": "AWS region for the bucket",
}
OPTIONAL_ENV_VARS: dict[str, str] = {
    "AWS_PREFIX": "Key prefix inside the bucket",
    "AWS_SESSION_TOKEN": "Session token for temporary credentials",
}


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


def resolve_credentials(environ: Mapping[str, str]) -> UploadRequest:
    """Build an ``UploadRequest`` skeleton from *environ*.

    Raises
    ------
    MissingConfigurationError
        When any required variable is unset or empty.  The error lists
        every missing variable and none of the present ones.

    """
    missing = [
        (name, description)
        for name, description in REQUIRED_ENV_VARS.items()
        if not environ.get(name)
    ]
    if missing:
        raise MissingConfigurationError(missing)

    return UploadRequest(
        access_key=environ["AWS_ACCESS_KEY_ID"],
        secret_key=environ["AWS_SECRET_ACCESS_KEY"],
        session_token=environ.get("AWS_SESSION_TOKEN", ""),
        bucket=environ["AWS_BUCKET"],
        region=environ["AWS_REGION"],
        prefix=environ.get("AWS_PREFIX", ""),
    )


# ---------------------------------------------------------------------------
# Upload settings
# ---------------------------------------------------------------------------


class UploadSettings(BaseModel):
    """Non-secret settings for the ``upload`` command."""

    archive_file: str = "rover.zip"
    log_file: str = "rover.log"
    log_level: str = "INFO"
    spinner: str = "line"
    spinner_style: str = "bright_cyan"
    spinner_text: str = "Uploading archive ..."

    def merge(self, override: dict[str, object]) -> UploadSettings:
        """Return a copy where known keys from *override* take priority.

        ``None`` values and unknown keys are ignored.
        """
        update = {
            k: v
            for k, v in override.items()
            if k in UploadSettings.model_fields and v is not None
        }
        try:
            return UploadSettings(**{**self.model_dump(), **update})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid upload settings: {e}") from e


def get_config_path(environ: Mapping[str, str]) -> Path:
    """Return the user config path: ROVER_CONFIG if set, else CONFIG_PATH."""
    path = environ.get("ROVER_CONFIG")
    return Path(path) if path else CONFIG_PATH


def _load_preset_data() -> dict[str, object]:
    """Load the bundled preset YAML and return raw dict."""
    ref = importlib.resources.files("rover.presets").joinpath("default.yaml")
    text = ref.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if isinstance(data, dict):
        return data
    return {}


def _load_raw_yaml(path: Path) -> dict[str, object]:
    """Load a YAML file and return its top-level mapping (or empty dict)."""
    if not path.is_file():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        logger.warning(f"Invalid config format in {path}; expected mapping.")
        return {}
    return data


def _upload_section(data: dict[str, object], source: object) -> dict[str, object]:
    """Return the ``upload`` section of *data*, or empty dict if malformed."""
    section = data.get("upload", {})
    if not isinstance(section, dict):
        logger.warning(f"Invalid 'upload' section in {source}; expected mapping.")
        return {}
    return section


def load_upload_settings(
    environ: Mapping[str, str],
    config_path: Path | None = None,
) -> UploadSettings:
    """Merge preset and user file: preset < file."""
    preset = UploadSettings().merge(
        _upload_section(_load_preset_data(), "bundled preset")
    )
    path = config_path if config_path is not None else get_config_path(environ)
    if path.is_file():
        logger.trace(f"Loading config from {path}")
    return preset.merge(_upload_section(_load_raw_yaml(path), path))
