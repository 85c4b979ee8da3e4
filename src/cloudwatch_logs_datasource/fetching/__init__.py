"""Paged fetching from the CloudWatch Logs API."""

from .pagination import (
    PageCollection,
    PaginationLimits,
    collect_pages,
    fetch_all_events,
    list_log_groups,
    list_log_streams,
)

__all__ = [
    "PageCollection",
    "PaginationLimits",
    "collect_pages",
    "fetch_all_events",
    "list_log_groups",
    "list_log_streams",
]
