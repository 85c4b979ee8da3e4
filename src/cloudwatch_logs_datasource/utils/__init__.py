"""Utility functions for the CloudWatch Logs datasource."""

from .logging_utils import setup_logging
from .time_utils import format_epoch_millis, to_epoch_millis

__all__ = [
    # Time conversion
    "format_epoch_millis",
    "to_epoch_millis",
    # Logging
    "setup_logging",
]
