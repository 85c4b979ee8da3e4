"""
Query decoder: host query models to typed query descriptors.

Decoding is structural only. Field names match case-insensitively, the
way the host's models have historically been read, and a known field
with the wrong JSON type is a decode error. Values are not checked for
meaning (a region string is never verified to be a real region).
"""

import json
import logging
import re
from typing import Any, Optional

from ..config.constants import (
    METRIC_FIND_REF_ID,
    QUERY_TYPE_ANNOTATION,
    QUERY_TYPE_METRIC_FIND,
)
from ..exceptions import QueryDecodeError
from ..schemas.request import DatasourceRequest
from .models import (
    AnnotationQuery,
    DecodedQuery,
    LogFilter,
    LogTableQuery,
    MetadataSuggestionQuery,
    QueryTarget,
    TimeRange,
)

logger = logging.getLogger(__name__)

_EPOCH_MS_PATTERN = re.compile(r"[+-]?\d+")


# =============================================================================
# Field Access
# =============================================================================


def _lookup(obj: dict[str, Any], key: str) -> Any:
    """Get a value by key, falling back to a case-insensitive match."""
    if key in obj:
        return obj[key]
    lowered = key.lower()
    for candidate, value in obj.items():
        if candidate.lower() == lowered:
            return value
    return None


def _get_str(obj: dict[str, Any], key: str) -> Optional[str]:
    value = _lookup(obj, key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise QueryDecodeError("Expected a string", field=key, value=value)
    return value


def _get_int(obj: dict[str, Any], key: str) -> Optional[int]:
    value = _lookup(obj, key)
    if value is None:
        return None
    # bool is an int subclass but never a valid count or timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise QueryDecodeError("Expected an integer", field=key, value=value)
    return value


def _get_str_list(obj: dict[str, Any], key: str) -> tuple[str, ...]:
    value = _lookup(obj, key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise QueryDecodeError("Expected a list of strings", field=key, value=value)
    return tuple(value)


def load_model(model_json: str) -> dict[str, Any]:
    """
    Parse a raw query model.

    Args:
        model_json: JSON document sent by the host

    Returns:
        The model as a dictionary

    Raises:
        QueryDecodeError: If the document is not a JSON object
    """
    try:
        model = json.loads(model_json)
    except (TypeError, ValueError) as e:
        raise QueryDecodeError(f"Invalid query model JSON: {e}") from e

    if not isinstance(model, dict):
        raise QueryDecodeError(
            f"Query model must be a JSON object, got {type(model).__name__}"
        )
    return model


# =============================================================================
# Decoding
# =============================================================================


def decode_log_filter(raw: Any) -> LogFilter:
    """
    Decode the `input` filter descriptor of a query model.

    Args:
        raw: The decoded `input` value (object or null)

    Returns:
        LogFilter instance

    Raises:
        QueryDecodeError: If the descriptor or one of its fields is mistyped
    """
    if raw is None:
        return LogFilter()
    if not isinstance(raw, dict):
        raise QueryDecodeError("Expected an object", field="input", value=raw)

    return LogFilter(
        log_group_name=_get_str(raw, "logGroupName"),
        log_stream_names=_get_str_list(raw, "logStreamNames"),
        log_stream_name_prefix=_get_str(raw, "logStreamNamePrefix"),
        filter_pattern=_get_str(raw, "filterPattern"),
        page_size=_get_int(raw, "limit"),
        start_ms=_get_int(raw, "startTime"),
        end_ms=_get_int(raw, "endTime"),
    )


def decode_target(model: str | dict[str, Any], ref_id: str = "") -> QueryTarget:
    """
    Decode one query model into a QueryTarget.

    Args:
        model: Raw JSON model or an already parsed model
        ref_id: Reference id used when the model carries none

    Returns:
        QueryTarget instance

    Raises:
        QueryDecodeError: If the model is not valid JSON or mistyped
    """
    if isinstance(model, str):
        model = load_model(model)

    return QueryTarget(
        ref_id=_get_str(model, "refId") or ref_id,
        query_type=_get_str(model, "queryType") or "",
        format=_get_str(model, "format") or "",
        region=_get_str(model, "region") or "",
        log_filter=decode_log_filter(_lookup(model, "input")),
    )


def parse_epoch_millis(raw: str, field: str) -> int:
    """
    Parse a decimal-string epoch millisecond value.

    Raises:
        QueryDecodeError: If the value is not a base-10 integer
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if not isinstance(raw, str) or not _EPOCH_MS_PATTERN.fullmatch(raw):
        raise QueryDecodeError("Invalid epoch milliseconds", field=field, value=raw)
    return int(raw)


def parse_time_range(from_raw: str, to_raw: str) -> TimeRange:
    """
    Parse the host's raw time range.

    Args:
        from_raw: Start boundary as decimal-string epoch milliseconds
        to_raw: End boundary as decimal-string epoch milliseconds

    Returns:
        TimeRange instance

    Raises:
        QueryDecodeError: If either boundary is malformed
    """
    return TimeRange(
        from_ms=parse_epoch_millis(from_raw, "fromRaw"),
        to_ms=parse_epoch_millis(to_raw, "toRaw"),
    )


def decode_metadata_query(
    model: dict[str, Any], default_region: str = ""
) -> MetadataSuggestionQuery:
    """Decode the parameters of a metadata-suggestion lookup."""
    return MetadataSuggestionQuery(
        region=_get_str(model, "region") or default_region,
        subtype=_get_str(model, "subtype") or "",
        prefix=_get_str(model, "prefix") or "",
        log_group_name=_get_str(model, "logGroupName") or "",
    )


def decode_request(
    request: DatasourceRequest, default_region: str = ""
) -> DecodedQuery:
    """
    Decode a request into exactly one query variant.

    The first query's `queryType` selects the variant:
        - 'metricFindQuery': MetadataSuggestionQuery from the first model
        - 'annotationQuery': AnnotationQuery for the first model
        - absent or empty: LogTableQuery over every model

    The request time range is applied to every decoded target, and
    targets naming no region get `default_region`.

    Args:
        request: Host request
        default_region: Region for targets that name none

    Returns:
        One of MetadataSuggestionQuery, AnnotationQuery, LogTableQuery

    Raises:
        QueryDecodeError: On malformed models, a malformed time range, an
            empty request or an unknown queryType. Errors in a
            metricFindQuery model carry the metricFindQuery ref id.
    """
    if not request.queries:
        raise QueryDecodeError("Request contains no queries", field="queries")

    first_query = request.queries[0]
    first_model = load_model(first_query.model_json)
    query_type = _get_str(first_model, "queryType") or ""

    if query_type == QUERY_TYPE_METRIC_FIND:
        try:
            return decode_metadata_query(first_model, default_region=default_region)
        except QueryDecodeError as e:
            raise QueryDecodeError(
                e.message, field=e.field, value=e.value, ref_id=METRIC_FIND_REF_ID
            ) from e

    if query_type not in ("", QUERY_TYPE_ANNOTATION):
        raise QueryDecodeError(
            "Unsupported queryType", field="queryType", value=query_type
        )

    time_range = parse_time_range(request.time_range.from_raw, request.time_range.to_raw)

    def bind(model: str | dict[str, Any], ref_id: str) -> QueryTarget:
        target = decode_target(model, ref_id=ref_id)
        return target.with_time_range(time_range).with_default_region(default_region)

    if query_type == QUERY_TYPE_ANNOTATION:
        return AnnotationQuery(target=bind(first_model, first_query.ref_id))

    targets = tuple(bind(query.model_json, query.ref_id) for query in request.queries)
    logger.debug(f"Decoded {len(targets)} log table target(s)")
    return LogTableQuery(targets=targets)
