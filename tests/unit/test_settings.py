"""
Unit tests for settings loading and validation.
"""

import pytest

from cloudwatch_logs_datasource.config import settings as settings_module
from cloudwatch_logs_datasource.config.settings import (
    Settings,
    clear_settings_cache,
    get_settings,
)
from cloudwatch_logs_datasource.config.sops_loader import (
    is_encrypted_path,
    load_config_file,
)

ENV_KEYS = [
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_PROFILE",
    "CWL_MAX_PAGES",
    "CWL_MAX_RECORDS",
    "CWL_ON_LIMIT",
    "CWL_DISPLAY_TIMEZONE",
    "CWL_SKIP_INVALID_RECORDS",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove datasource environment variables."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield monkeypatch
    clear_settings_cache()


class TestSettingsDefaults:
    """Tests for default values and validation."""

    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.default_region == "us-east-1"
        assert settings.aws_profile is None
        assert settings.max_pages == 100
        assert settings.max_records == 10000
        assert settings.on_limit == "truncate"
        assert settings.display_timezone == "UTC"
        assert settings.skip_invalid_records is False
        assert settings.validate() == []

    def test_validate_reports_each_problem(self):
        """Every invalid value produces an error message."""
        settings = Settings(
            default_region="",
            max_pages=-1,
            max_records=-5,
            on_limit="ignore",
            display_timezone="Not/AZone",
        )

        errors = settings.validate()

        assert len(errors) == 5
        assert any("display_timezone" in e for e in errors)

    def test_to_dict_round_trips_through_from_dict(self):
        """from_dict(to_dict()) reproduces the settings."""
        settings = Settings(
            default_region="eu-west-1",
            aws_profile="ops",
            max_pages=5,
            max_records=50,
            on_limit="error",
            display_timezone="Europe/Berlin",
            skip_invalid_records=True,
        )

        assert Settings.from_dict(settings.to_dict()) == settings


class TestSettingsFromEnv:
    """Tests for environment loading."""

    def test_reads_environment(self, clean_env):
        """Environment variables override defaults."""
        clean_env.setenv("AWS_DEFAULT_REGION", "eu-central-1")
        clean_env.setenv("AWS_PROFILE", "dev")
        clean_env.setenv("CWL_MAX_PAGES", "7")
        clean_env.setenv("CWL_ON_LIMIT", "error")
        clean_env.setenv("CWL_SKIP_INVALID_RECORDS", "true")

        settings = Settings.from_env()

        assert settings.default_region == "eu-central-1"
        assert settings.aws_profile == "dev"
        assert settings.max_pages == 7
        assert settings.on_limit == "error"
        assert settings.skip_invalid_records is True

    def test_aws_region_takes_precedence(self, clean_env):
        """AWS_REGION wins over AWS_DEFAULT_REGION."""
        clean_env.setenv("AWS_REGION", "us-west-2")
        clean_env.setenv("AWS_DEFAULT_REGION", "eu-central-1")

        assert Settings.from_env().default_region == "us-west-2"

    def test_invalid_int_uses_default(self, clean_env):
        """Unparseable integers fall back to defaults."""
        clean_env.setenv("CWL_MAX_RECORDS", "lots")

        assert Settings.from_env().max_records == 10000


class TestSettingsFromDict:
    """Tests for Settings.from_dict with partial or loosely typed configs."""

    def test_null_values_take_defaults(self):
        """Keys present but empty in YAML fall back to defaults."""
        settings = Settings.from_dict(
            {
                "aws": {"default_region": None},
                "pagination": {"max_pages": None, "max_records": None, "on_limit": None},
                "shaping": {"display_timezone": None, "skip_invalid_records": None},
            }
        )

        assert settings == Settings()

    def test_numeric_strings_and_invalid_ints(self):
        """Numeric strings are parsed; unparsable values use the default."""
        settings = Settings.from_dict(
            {"pagination": {"max_pages": "7", "max_records": "lots"}}
        )

        assert settings.max_pages == 7
        assert settings.max_records == 10000

    @pytest.mark.parametrize(
        "value,expected",
        [("false", False), ("False", False), ("true", True), (True, True), (False, False)],
    )
    def test_skip_invalid_records_parsing(self, value, expected):
        """String booleans are read by value, not by truthiness."""
        settings = Settings.from_dict({"shaping": {"skip_invalid_records": value}})

        assert settings.skip_invalid_records is expected

    def test_non_mapping_section_raises(self):
        with pytest.raises(ValueError, match="'pagination' must be a mapping"):
            Settings.from_dict({"pagination": 5})


class TestConfigFiles:
    """Tests for YAML config loading."""

    def test_load_plain_yaml(self, tmp_path):
        """Plain YAML files load as dictionaries."""
        path = tmp_path / "config.yaml"
        path.write_text("pagination:\n  max_pages: 3\n")

        assert load_config_file(path) == {"pagination": {"max_pages": 3}}

    def test_empty_yaml_is_empty_config(self, tmp_path):
        """An empty file is an empty mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config_file(path) == {}

    def test_non_mapping_yaml_raises(self, tmp_path):
        """A YAML list is not a config."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config_file(path)

    def test_is_encrypted_path(self, tmp_path):
        """Only .enc.yaml/.enc.yml files go through SOPS."""
        assert is_encrypted_path(tmp_path / "config.enc.yaml")
        assert is_encrypted_path(tmp_path / "CONFIG.ENC.YML")
        assert not is_encrypted_path(tmp_path / "config.yaml")

    def test_get_settings_from_file(self, clean_env, tmp_path):
        """get_settings loads an explicit config file."""
        path = tmp_path / "datasource.yaml"
        path.write_text(
            "aws:\n  default_region: sa-east-1\n"
            "shaping:\n  display_timezone: America/Sao_Paulo\n"
        )

        settings = get_settings(str(path))

        assert settings.default_region == "sa-east-1"
        assert settings.display_timezone == "America/Sao_Paulo"

    def test_get_settings_invalid_file_falls_back_to_env(self, clean_env, tmp_path):
        """A broken config file falls back to environment variables."""
        path = tmp_path / "broken.yaml"
        path.write_text("aws: [unclosed\n")
        clean_env.setenv("AWS_REGION", "ca-central-1")

        assert get_settings(str(path)).default_region == "ca-central-1"

    def test_get_settings_half_filled_file(self, clean_env, tmp_path):
        """A config with empty keys loads, using defaults for the empty ones."""
        path = tmp_path / "partial.yaml"
        path.write_text("pagination:\n  max_pages:\n  max_records: 50\n")

        settings = get_settings(str(path))

        assert settings.max_pages == 100
        assert settings.max_records == 50

    def test_get_settings_bad_section_falls_back_to_env(self, clean_env, tmp_path):
        """A section that is not a mapping falls back to environment variables."""
        path = tmp_path / "bad_section.yaml"
        path.write_text("shaping: utc\n")
        clean_env.setenv("CWL_DISPLAY_TIMEZONE", "Europe/Berlin")

        assert get_settings(str(path)).display_timezone == "Europe/Berlin"

    def test_get_settings_without_files_uses_env(self, clean_env, tmp_path):
        """With no config files present, settings come from the environment."""
        clean_env.chdir(tmp_path)
        clean_env.setenv("CWL_MAX_PAGES", "11")

        assert get_settings().max_pages == 11
        assert settings_module.DEFAULT_CONFIG_PATH.name == "config.yaml"
