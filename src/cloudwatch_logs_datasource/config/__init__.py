"""Configuration module."""

from .constants import (
    FORMAT_TABLE,
    FORMAT_TIMESERIES,
    LOG_TABLE_COLUMNS,
    METRIC_FIND_REF_ID,
    QUERY_TYPE_ANNOTATION,
    QUERY_TYPE_METRIC_FIND,
    SUBTYPE_LOG_GROUP_NAMES,
    SUBTYPE_LOG_STREAM_NAMES,
    SUGGESTION_TABLE_COLUMNS,
)
from .settings import Settings, clear_settings_cache, get_settings
from .sops_loader import decrypt_sops_file, load_config_file

__all__ = [
    # Query modes and formats
    "QUERY_TYPE_METRIC_FIND",
    "QUERY_TYPE_ANNOTATION",
    "METRIC_FIND_REF_ID",
    "FORMAT_TABLE",
    "FORMAT_TIMESERIES",
    "SUBTYPE_LOG_GROUP_NAMES",
    "SUBTYPE_LOG_STREAM_NAMES",
    # Table schemas
    "LOG_TABLE_COLUMNS",
    "SUGGESTION_TABLE_COLUMNS",
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Config loading
    "load_config_file",
    "decrypt_sops_file",
]
