"""Query decoding: host query models to typed descriptors."""

from .decoder import (
    decode_log_filter,
    decode_request,
    decode_target,
    load_model,
    parse_time_range,
)
from .models import (
    AnnotationQuery,
    DecodedQuery,
    LogFilter,
    LogTableQuery,
    MetadataSuggestionQuery,
    QueryTarget,
    TimeRange,
)

__all__ = [
    # Models
    "TimeRange",
    "LogFilter",
    "QueryTarget",
    "MetadataSuggestionQuery",
    "AnnotationQuery",
    "LogTableQuery",
    "DecodedQuery",
    # Decoding
    "load_model",
    "decode_log_filter",
    "decode_target",
    "decode_request",
    "parse_time_range",
]
