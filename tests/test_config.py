"""Tests for credential resolution and upload settings loading."""

from __future__ import annotations

from itertools import combinations
from typing import TYPE_CHECKING

import pytest
import yaml

from rover.config import (
    REQUIRED_ENV_VARS,
    UploadSettings,
    load_upload_settings,
    resolve_credentials,
)
from rover.exceptions import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from pathlib import Path


def _missing_subsets() -> list[tuple[str, ...]]:
    names = list(REQUIRED_ENV_VARS)
    return [
        subset
        for size in range(1, len(names) + 1)
        for subset in combinations(names, size)
    ]


class TestResolveCredentials:
    """Tests for resolve_credentials()."""

    def test_full_environment(self, aws_env: dict[str, str]) -> None:
        request = resolve_credentials(aws_env)

        assert request.access_key == "AKIATESTKEY"
        assert request.secret_key == "test-secret"  # noqa: S105
        assert request.bucket == "retention-bucket"
        assert request.region == "eu-west-1"
        assert request.prefix == "backups"
        assert request.session_token == ""

    def test_prefix_defaults_to_empty(self, aws_env: dict[str, str]) -> None:
        del aws_env["AWS_PREFIX"]

        assert resolve_credentials(aws_env).prefix == ""

    def test_session_token_passed_through(self, aws_env: dict[str, str]) -> None:
        aws_env["AWS_SESSION_TOKEN"] = "session-token"  # noqa: S105
        request = resolve_credentials(aws_env)

        assert request.session_token == "session-token"  # noqa: S105

    @pytest.mark.parametrize("missing", _missing_subsets(), ids="+".join)
    def test_names_exactly_the_missing_vars(
        self,
        aws_env: dict[str, str],
        missing: tuple[str, ...],
    ) -> None:
        for name in missing:
            del aws_env[name]

        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_credentials(aws_env)

        assert set(exc_info.value.names) == set(missing)

    def test_empty_value_counts_as_missing(self, aws_env: dict[str, str]) -> None:
        aws_env["AWS_BUCKET"] = ""

        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_credentials(aws_env)

        assert exc_info.value.names == ["AWS_BUCKET"]

    def test_region_unset_reports_only_region(self, aws_env: dict[str, str]) -> None:
        del aws_env["AWS_REGION"]

        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_credentials(aws_env)

        assert exc_info.value.rows() == [("AWS_REGION", "AWS region for the bucket")]
        assert isinstance(exc_info.value, ConfigurationError)

    def test_missing_reported_in_declaration_order(self) -> None:
        with pytest.raises(MissingConfigurationError) as exc_info:
            resolve_credentials({})

        assert exc_info.value.names == list(REQUIRED_ENV_VARS)


class TestLoadUploadSettings:
    """Tests for load_upload_settings()."""

    def test_preset_defaults(self, tmp_path: Path) -> None:
        settings = load_upload_settings({}, config_path=tmp_path / "missing.yaml")

        assert settings == UploadSettings()
        assert settings.archive_file == "rover.zip"
        assert settings.log_file == "rover.log"

    def test_user_file_overrides_preset(self, tmp_path: Path) -> None:
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text(
            yaml.safe_dump({"upload": {"archive_file": "diag.zip", "spinner": "dots"}}),
            encoding="utf-8",
        )

        settings = load_upload_settings({"ROVER_CONFIG": str(cfg_path)})

        assert settings.archive_file == "diag.zip"
        assert settings.spinner == "dots"
        assert settings.log_file == "rover.log"

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text(
            yaml.safe_dump({"upload": {"bucket": "nope", "log_file": "x.log"}}),
            encoding="utf-8",
        )

        settings = load_upload_settings({}, config_path=cfg_path)

        assert settings.log_file == "x.log"
        assert not hasattr(settings, "bucket")

    def test_non_mapping_file_warns(
        self,
        tmp_path: Path,
        log_messages: list[str],
    ) -> None:
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text("- just\n- a list\n", encoding="utf-8")

        settings = load_upload_settings({}, config_path=cfg_path)

        assert settings == UploadSettings()
        assert any("expected mapping" in m for m in log_messages)

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text("upload: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_upload_settings({}, config_path=cfg_path)

    def test_wrong_value_type_raises(self, tmp_path: Path) -> None:
        cfg_path = tmp_path / "config.yaml"
        cfg_path.write_text(
            yaml.safe_dump({"upload": {"spinner_text": ["not", "a", "string"]}}),
            encoding="utf-8",
        )

        with pytest.raises(ConfigurationError):
            load_upload_settings({}, config_path=cfg_path)
