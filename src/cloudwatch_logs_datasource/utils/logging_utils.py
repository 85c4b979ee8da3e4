"""Logging setup for scripts."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging for command-line use.

    Library loggers (botocore, boto3, urllib3) stay at WARNING unless
    debugging.

    Args:
        level: Logging level for the application loggers
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    if level > logging.DEBUG:
        for noisy in ("botocore", "boto3", "urllib3"):
            logging.getLogger(noisy).setLevel(logging.WARNING)
