"""
Pagination driver for CloudWatch Logs list and search operations.

Drives a boto3 paginator until the provider reports no further pages,
accumulating every page's items in provider order. Accumulation is
bounded by PaginationLimits: when a bound is reached the result is
either truncated or the fetch fails, depending on `on_limit`.

Any page-fetch error aborts the whole fetch and propagates unchanged.
There is no retry and no partial-result fallback.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from ..config.constants import (
    DEFAULT_MAX_PAGES,
    DEFAULT_MAX_RECORDS,
    ON_LIMIT_ERROR,
    ON_LIMIT_TRUNCATE,
    OP_DESCRIBE_LOG_GROUPS,
    OP_DESCRIBE_LOG_STREAMS,
    OP_FILTER_LOG_EVENTS,
)
from ..exceptions import PaginationLimitError
from ..query.models import LogFilter

if TYPE_CHECKING:
    from ..config.settings import Settings

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class PaginationLimits:
    """Bounds on a single paged fetch. None disables a bound."""

    max_pages: Optional[int] = DEFAULT_MAX_PAGES
    max_records: Optional[int] = DEFAULT_MAX_RECORDS
    on_limit: str = ON_LIMIT_TRUNCATE

    @classmethod
    def unbounded(cls) -> "PaginationLimits":
        """Limits that never stop a fetch early."""
        return cls(max_pages=None, max_records=None)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PaginationLimits":
        """Build limits from settings, where 0 means unbounded."""
        return cls(
            max_pages=settings.max_pages or None,
            max_records=settings.max_records or None,
            on_limit=settings.on_limit,
        )


@dataclass
class PageCollection:
    """Items accumulated across all pages of one operation."""

    items: list[dict[str, Any]] = field(default_factory=list)
    pages: int = 0
    truncated: bool = False


# =============================================================================
# Core Functions
# =============================================================================


def collect_pages(
    client: Any,
    operation: str,
    result_key: str,
    params: dict[str, Any],
    limits: Optional[PaginationLimits] = None,
) -> PageCollection:
    """
    Run a paginated operation to completion (or to its bound).

    Args:
        client: boto3 CloudWatch Logs client
        operation: Paginated operation name (e.g. 'filter_log_events')
        result_key: Key of the item list in each page (e.g. 'events')
        params: Operation parameters
        limits: Accumulation bounds (defaults to PaginationLimits())

    Returns:
        PageCollection with all items in provider order

    Raises:
        PaginationLimitError: If a bound is hit and on_limit is 'error'
        botocore.exceptions.ClientError: If any page fetch fails
    """
    if limits is None:
        limits = PaginationLimits()

    collection = PageCollection()
    paginator = client.get_paginator(operation)

    for page in paginator.paginate(**params):
        collection.pages += 1
        page_items = page.get(result_key, [])
        collection.items.extend(page_items)
        has_more = bool(page.get("nextToken"))

        logger.debug(
            f"{operation}: page {collection.pages} returned {len(page_items)} item(s), "
            f"{len(collection.items)} total"
        )

        over_records = limits.max_records is not None and (
            len(collection.items) > limits.max_records
            or (len(collection.items) == limits.max_records and has_more)
        )
        over_pages = (
            limits.max_pages is not None
            and collection.pages >= limits.max_pages
            and has_more
        )

        if over_records or over_pages:
            if limits.on_limit == ON_LIMIT_ERROR:
                raise PaginationLimitError(
                    operation, collection.pages, len(collection.items)
                )
            if limits.max_records is not None:
                del collection.items[limits.max_records :]
            collection.truncated = True
            logger.warning(
                f"{operation}: pagination limit reached after {collection.pages} "
                f"page(s), result truncated to {len(collection.items)} item(s)"
            )
            break

    return collection


def fetch_all_events(
    client: Any,
    log_filter: LogFilter,
    limits: Optional[PaginationLimits] = None,
) -> PageCollection:
    """
    Fetch every log event matching a filter.

    Args:
        client: boto3 CloudWatch Logs client
        log_filter: Filter descriptor (time range already applied)
        limits: Accumulation bounds

    Returns:
        PageCollection of raw event dictionaries
    """
    operation, result_key = OP_FILTER_LOG_EVENTS
    return collect_pages(client, operation, result_key, log_filter.to_params(), limits)


def list_log_groups(
    client: Any,
    prefix: str = "",
    limits: Optional[PaginationLimits] = None,
) -> PageCollection:
    """
    List log groups whose name starts with `prefix`.

    Args:
        client: boto3 CloudWatch Logs client
        prefix: Log group name prefix (empty lists all groups)
        limits: Accumulation bounds

    Returns:
        PageCollection of log group dictionaries
    """
    operation, result_key = OP_DESCRIBE_LOG_GROUPS
    params = {"logGroupNamePrefix": prefix} if prefix else {}
    return collect_pages(client, operation, result_key, params, limits)


def list_log_streams(
    client: Any,
    log_group_name: str,
    limits: Optional[PaginationLimits] = None,
) -> PageCollection:
    """
    List the log streams of a log group.

    Args:
        client: boto3 CloudWatch Logs client
        log_group_name: Name of the log group
        limits: Accumulation bounds

    Returns:
        PageCollection of log stream dictionaries
    """
    operation, result_key = OP_DESCRIBE_LOG_STREAMS
    return collect_pages(
        client, operation, result_key, {"logGroupName": log_group_name}, limits
    )
