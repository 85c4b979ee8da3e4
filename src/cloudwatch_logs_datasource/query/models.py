"""
Typed query descriptors decoded from host query models.

A request is decoded once into exactly one of the query variants
(MetadataSuggestionQuery, AnnotationQuery, LogTableQuery), which the
datasource then matches exhaustively.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union


@dataclass(frozen=True)
class TimeRange:
    """Request-level time range in epoch milliseconds."""

    from_ms: int
    to_ms: int


@dataclass(frozen=True)
class LogFilter:
    """
    Filter descriptor for a log event search.

    Mirrors the subset of FilterLogEvents parameters a query model may
    carry. start_ms/end_ms are always overwritten by the request's time
    range before a search runs.
    """

    log_group_name: Optional[str] = None
    log_stream_names: tuple[str, ...] = ()
    log_stream_name_prefix: Optional[str] = None
    filter_pattern: Optional[str] = None
    page_size: Optional[int] = None
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None

    def to_params(self) -> dict[str, Any]:
        """
        Convert to filter_log_events keyword arguments.

        Unset fields are omitted.

        Returns:
            Parameter dictionary for the provider call
        """
        params: dict[str, Any] = {}
        if self.log_group_name is not None:
            params["logGroupName"] = self.log_group_name
        if self.log_stream_names:
            params["logStreamNames"] = list(self.log_stream_names)
        if self.log_stream_name_prefix:
            params["logStreamNamePrefix"] = self.log_stream_name_prefix
        if self.filter_pattern:
            params["filterPattern"] = self.filter_pattern
        if self.page_size is not None:
            params["limit"] = self.page_size
        if self.start_ms is not None:
            params["startTime"] = self.start_ms
        if self.end_ms is not None:
            params["endTime"] = self.end_ms
        return params


@dataclass(frozen=True)
class QueryTarget:
    """One decoded query target."""

    ref_id: str = ""
    query_type: str = ""
    format: str = ""
    region: str = ""
    log_filter: LogFilter = field(default_factory=LogFilter)

    def with_time_range(self, time_range: TimeRange) -> "QueryTarget":
        """
        Return a copy whose filter is bounded by the given time range.

        Args:
            time_range: Request-level time range

        Returns:
            New QueryTarget with start/end overwritten
        """
        bounded = replace(
            self.log_filter, start_ms=time_range.from_ms, end_ms=time_range.to_ms
        )
        return replace(self, log_filter=bounded)

    def with_default_region(self, region: str) -> "QueryTarget":
        """Return a copy using `region` when the target names none."""
        if self.region:
            return self
        return replace(self, region=region)


@dataclass(frozen=True)
class MetadataSuggestionQuery:
    """Pick-list lookup of log group or log stream names."""

    region: str = ""
    subtype: str = ""
    prefix: str = ""
    log_group_name: str = ""


@dataclass(frozen=True)
class AnnotationQuery:
    """Annotation lookup over the first target of a request."""

    target: QueryTarget


@dataclass(frozen=True)
class LogTableQuery:
    """Bulk log search over every target of a request."""

    targets: tuple[QueryTarget, ...]


DecodedQuery = Union[MetadataSuggestionQuery, AnnotationQuery, LogTableQuery]
