"""
Application settings and configuration management.

Supports loading from:
1. SOPS-encrypted YAML files (config.enc.yaml)
2. Plain YAML files (config.yaml)
3. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from dateutil import tz

from .constants import (
    DEFAULT_DISPLAY_TIMEZONE,
    DEFAULT_MAX_PAGES,
    DEFAULT_MAX_RECORDS,
    DEFAULT_REGION,
    ON_LIMIT_CHOICES,
    ON_LIMIT_TRUNCATE,
)

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Settings for the CloudWatch Logs datasource."""

    # AWS Settings
    default_region: str = DEFAULT_REGION
    aws_profile: Optional[str] = None

    # Pagination bounds (0 disables a bound)
    max_pages: int = DEFAULT_MAX_PAGES
    max_records: int = DEFAULT_MAX_RECORDS
    on_limit: str = ON_LIMIT_TRUNCATE

    # Result shaping
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE
    skip_invalid_records: bool = False

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if not self.default_region:
            errors.append("aws.default_region is required")

        if self.max_pages < 0:
            errors.append(f"max_pages must be >= 0, got {self.max_pages}")

        if self.max_records < 0:
            errors.append(f"max_records must be >= 0, got {self.max_records}")

        if self.on_limit not in ON_LIMIT_CHOICES:
            errors.append(
                f"on_limit must be one of {', '.join(ON_LIMIT_CHOICES)}, "
                f"got {self.on_limit!r}"
            )

        if tz.gettz(self.display_timezone) is None:
            errors.append(f"Unknown display_timezone: {self.display_timezone!r}")

        return errors

    def get_display_tzinfo(self):
        """Resolve display_timezone to a tzinfo (UTC if unknown)."""
        return tz.gettz(self.display_timezone) or tz.UTC

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "aws": {
                "default_region": self.default_region,
                "profile": self.aws_profile,
            },
            "pagination": {
                "max_pages": self.max_pages,
                "max_records": self.max_records,
                "on_limit": self.on_limit,
            },
            "shaping": {
                "display_timezone": self.display_timezone,
                "skip_invalid_records": self.skip_invalid_records,
            },
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Settings":
        """
        Create Settings from configuration dictionary (e.g., from YAML).

        Keys that are absent or null take their defaults.

        Raises:
            ValueError: If a section is not a mapping
        """

        def section(name: str) -> dict[str, Any]:
            value = config.get(name) or {}
            if not isinstance(value, dict):
                raise ValueError(f"Config section '{name}' must be a mapping")
            return value

        def safe_int(values: dict[str, Any], key: str, default: int) -> int:
            """Safely parse int from a config value, using default on error."""
            value = values.get(key)
            if value is None or isinstance(value, bool):
                return default
            try:
                return int(value)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid {key}: {value!r}")
                return default

        def safe_bool(values: dict[str, Any], key: str, default: bool) -> bool:
            """Safely parse bool from a config value ('true'/'false' strings too)."""
            value = values.get(key)
            if value is None:
                return default
            if isinstance(value, str):
                return value.strip().lower() == "true"
            return bool(value)

        aws = section("aws")
        pagination = section("pagination")
        shaping = section("shaping")

        return cls(
            default_region=aws.get("default_region") or DEFAULT_REGION,
            aws_profile=aws.get("profile") or None,
            max_pages=safe_int(pagination, "max_pages", DEFAULT_MAX_PAGES),
            max_records=safe_int(pagination, "max_records", DEFAULT_MAX_RECORDS),
            on_limit=pagination.get("on_limit") or ON_LIMIT_TRUNCATE,
            display_timezone=(
                shaping.get("display_timezone") or DEFAULT_DISPLAY_TIMEZONE
            ),
            skip_invalid_records=safe_bool(shaping, "skip_invalid_records", False),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            try:
                return int(os.environ.get(key, str(default)))
            except ValueError:
                return default

        def safe_bool(key: str, default: bool) -> bool:
            """Safely parse bool from env var."""
            return os.environ.get(key, str(default).lower()).lower() == "true"

        return cls(
            default_region=(
                os.environ.get("AWS_REGION")
                or os.environ.get("AWS_DEFAULT_REGION")
                or DEFAULT_REGION
            ),
            aws_profile=os.environ.get("AWS_PROFILE") or None,
            max_pages=safe_int("CWL_MAX_PAGES", DEFAULT_MAX_PAGES),
            max_records=safe_int("CWL_MAX_RECORDS", DEFAULT_MAX_RECORDS),
            on_limit=os.environ.get("CWL_ON_LIMIT", ON_LIMIT_TRUNCATE),
            display_timezone=os.environ.get(
                "CWL_DISPLAY_TIMEZONE", DEFAULT_DISPLAY_TIMEZONE
            ),
            skip_invalid_records=safe_bool("CWL_SKIP_INVALID_RECORDS", False),
        )


# Default config file paths, checked in order
DEFAULT_ENCRYPTED_CONFIG_PATH = Path("config.enc.yaml")
DEFAULT_CONFIG_PATH = Path("config.yaml")


@lru_cache
def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Get cached settings instance.

    Loads from a YAML config file if available (SOPS-encrypted files are
    decrypted first), otherwise from env vars.

    Args:
        config_path: Optional path to a config file

    Returns:
        Settings instance
    """
    from .sops_loader import load_config_file

    if config_path:
        candidates = [Path(config_path)]
    else:
        candidates = [DEFAULT_ENCRYPTED_CONFIG_PATH, DEFAULT_CONFIG_PATH]

    for path in candidates:
        if not path.exists():
            continue
        try:
            return Settings.from_dict(load_config_file(path))
        except (RuntimeError, ValueError) as e:
            logger.warning(
                f"Failed to load config from {path}: {e}. "
                f"Falling back to environment variables"
            )
            break

    return Settings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
