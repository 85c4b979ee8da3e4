"""Result shaping: provider payloads to host tables."""

from .table import (
    REQUIRED_EVENT_FIELDS,
    Suggestion,
    events_to_annotation_json,
    logs_to_table,
    names_to_suggestions,
    sort_by_creation_time,
    suggestions_to_table,
)

__all__ = [
    "REQUIRED_EVENT_FIELDS",
    "Suggestion",
    "logs_to_table",
    "suggestions_to_table",
    "sort_by_creation_time",
    "names_to_suggestions",
    "events_to_annotation_json",
]
