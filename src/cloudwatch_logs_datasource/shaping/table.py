"""
Result shaping: raw CloudWatch payloads to host tables.

All functions here are pure. Log search results become a fixed
four-column table; metadata lookups become a two-column suggestion
table; annotation results are re-serialized as the provider's payload.
"""

import json
import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Iterable, Optional

from ..config.constants import LOG_TABLE_COLUMNS, SUGGESTION_TABLE_COLUMNS
from ..exceptions import RecordValidationError
from ..schemas.response import RowValue, Table
from ..utils.time_utils import format_epoch_millis

logger = logging.getLogger(__name__)

# Event fields required to build a log table row, with their expected types
REQUIRED_EVENT_FIELDS = {
    "timestamp": int,
    "ingestionTime": int,
    "logStreamName": str,
    "message": str,
}


@dataclass(frozen=True)
class Suggestion:
    """A pick-list entry: display text and underlying value."""

    text: str
    value: str


def _validate_event(event: dict[str, Any], index: int) -> None:
    for field_name, expected in REQUIRED_EVENT_FIELDS.items():
        value = event.get(field_name)
        if value is None:
            raise RecordValidationError(
                "Log event is missing a required field",
                field=field_name,
                record_index=index,
            )
        if isinstance(value, bool) or not isinstance(value, expected):
            raise RecordValidationError(
                f"Log event field has type {type(value).__name__}, "
                f"expected {expected.__name__}",
                field=field_name,
                record_index=index,
            )


def _format_event_time(
    event: dict[str, Any], field_name: str, index: int, tz: Optional[tzinfo]
) -> str:
    try:
        return format_epoch_millis(event[field_name], tz)
    except (ValueError, OverflowError, OSError) as e:
        raise RecordValidationError(
            f"Log event timestamp is out of range ({e})",
            field=field_name,
            record_index=index,
        ) from e


def _event_to_row(
    event: dict[str, Any], index: int, tz: Optional[tzinfo]
) -> list[RowValue]:
    _validate_event(event, index)
    return [
        RowValue.string(_format_event_time(event, "timestamp", index, tz)),
        RowValue.string(_format_event_time(event, "ingestionTime", index, tz)),
        RowValue.string(event["logStreamName"]),
        RowValue.string(event["message"]),
    ]


def logs_to_table(
    records: Iterable[dict[str, Any]],
    tz: Optional[tzinfo] = None,
    skip_invalid: bool = False,
) -> Table:
    """
    Shape log events into the four-column log table.

    Columns are Timestamp, IngestionTime, LogStreamName, Message. Rows
    follow record order; every cell is a string.

    Args:
        records: Raw filter_log_events events, in fetch order
        tz: Display timezone for both timestamp columns (UTC if None)
        skip_invalid: Drop invalid records with a warning instead of failing

    Returns:
        Table with one row per (valid) record

    Raises:
        RecordValidationError: If a record lacks a required field or has
            an unrepresentable timestamp, and skip_invalid is False
    """
    table = Table.with_columns(LOG_TABLE_COLUMNS)
    skipped = 0

    for index, event in enumerate(records):
        try:
            row = _event_to_row(event, index, tz)
        except RecordValidationError as e:
            if not skip_invalid:
                raise
            skipped += 1
            logger.warning(f"Skipping invalid log event: {e}")
            continue

        table.add_row(row)

    if skipped:
        logger.warning(f"Skipped {skipped} invalid log event(s)")

    return table


def suggestions_to_table(suggestions: Iterable[Suggestion]) -> Table:
    """
    Shape suggestions into the two-column `text, value` table.

    Args:
        suggestions: Suggestions in display order

    Returns:
        Table with one row per suggestion, input order preserved
    """
    table = Table.with_columns(SUGGESTION_TABLE_COLUMNS)
    for suggestion in suggestions:
        table.add_row(
            [RowValue.string(suggestion.text), RowValue.string(suggestion.value)]
        )
    return table


def sort_by_creation_time(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Sort log groups or streams by creationTime, newest first.

    The sort is stable: items with equal creation times keep provider
    order. Items without a creationTime sort last.
    """
    return sorted(items, key=lambda item: item.get("creationTime") or 0, reverse=True)


def names_to_suggestions(items: Iterable[dict[str, Any]], name_key: str) -> list[Suggestion]:
    """
    Build suggestions whose text and value are both the item's name.

    Args:
        items: Log group or log stream dictionaries
        name_key: 'logGroupName' or 'logStreamName'

    Returns:
        List of Suggestion
    """
    suggestions = []
    for item in items:
        name = item.get(name_key)
        if name is None:
            logger.warning(f"Skipping entry without {name_key}: {item!r}")
            continue
        suggestions.append(Suggestion(text=name, value=name))
    return suggestions


def _pascal_case(key: str) -> str:
    return key[:1].upper() + key[1:]


def events_to_annotation_json(events: Iterable[dict[str, Any]]) -> str:
    """
    Serialize fetched events as the provider's FilterLogEvents payload.

    Keys use the provider's PascalCase wire names (Events, Timestamp,
    Message, ...). NextToken and SearchedLogStreams are always null since
    the payload aggregates every page. Events is null, not an empty list,
    when nothing matched.

    Args:
        events: Raw filter_log_events events

    Returns:
        JSON string for the result's metadata field
    """
    wire_events = [
        {_pascal_case(key): value for key, value in event.items()} for event in events
    ]
    payload = {
        "Events": wire_events or None,
        "NextToken": None,
        "SearchedLogStreams": None,
    }
    return json.dumps(payload, default=str)
