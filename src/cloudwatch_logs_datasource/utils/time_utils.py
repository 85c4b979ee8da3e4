"""
Time conversion helpers.

CloudWatch Logs expresses every timestamp as epoch milliseconds; the host
displays ISO-8601 strings with a UTC offset.
"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from dateutil import parser as date_parser


def format_epoch_millis(epoch_ms: int, tz: Optional[tzinfo] = None) -> str:
    """
    Format epoch milliseconds as an ISO-8601 string with offset.

    The value is split into whole seconds and a sub-second remainder
    (converted to nanoseconds) before formatting. Output has second
    precision, so the remainder never changes the rendered text.

    Args:
        epoch_ms: Milliseconds since the Unix epoch
        tz: Display timezone (UTC if None)

    Returns:
        Timestamp string, e.g. '2023-11-14T22:13:20+00:00'

    Examples:
        >>> format_epoch_millis(1700000000123)
        '2023-11-14T22:13:20+00:00'
    """
    seconds, remainder_ms = divmod(epoch_ms, 1000)
    nanoseconds = remainder_ms * 1_000_000
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(
        microseconds=nanoseconds // 1000
    )
    return dt.astimezone(tz or timezone.utc).isoformat(timespec="seconds")


def _ensure_utc(dt: datetime) -> datetime:
    """
    Ensure datetime has UTC timezone.

    Naive datetimes are taken to be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_epoch_millis(value: Union[datetime, str, int]) -> int:
    """
    Convert a datetime, date string or epoch value to epoch milliseconds.

    Strings are either decimal epoch milliseconds or any date format
    dateutil understands (naive values are taken to be UTC).

    Args:
        value: datetime, string, or int epoch milliseconds

    Returns:
        Milliseconds since the Unix epoch

    Raises:
        ValueError: If a string cannot be parsed
    """
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lstrip("+-").isdigit():
            return int(stripped)
        value = date_parser.parse(stripped)
    return int(_ensure_utc(value).timestamp() * 1000)
