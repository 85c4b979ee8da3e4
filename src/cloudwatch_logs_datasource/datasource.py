"""
CloudWatch Logs datasource: the request entry point.

Decodes a host request into one query variant and routes it:

- MetadataSuggestionQuery: list log group or log stream names for
  pick-lists, shaped as a `text, value` table.
- AnnotationQuery: fetch events for the first target and return the raw
  payload as metadata JSON.
- LogTableQuery: fetch events for every target, sequentially, and return
  one four-column table per target.

Error policy: expected failures (decode errors, unsupported formats,
pagination bounds, invalid records, provider and client construction
errors) never escape query(). Each becomes a successful response holding
a single error result, whatever the mode.
"""

import logging
from typing import Any, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .client.registry import ClientRegistry, get_registry
from .config.constants import (
    FORMAT_TABLE,
    FORMAT_TIMESERIES,
    METRIC_FIND_REF_ID,
    SUBTYPE_LOG_GROUP_NAMES,
    SUBTYPE_LOG_STREAM_NAMES,
)
from .config.settings import Settings, get_settings
from .exceptions import (
    ConfigurationError,
    DatasourceError,
    QueryDecodeError,
    UnsupportedFormatError,
)
from .fetching.pagination import (
    PaginationLimits,
    fetch_all_events,
    list_log_groups,
    list_log_streams,
)
from .query.decoder import decode_request
from .query.models import (
    AnnotationQuery,
    DecodedQuery,
    LogTableQuery,
    MetadataSuggestionQuery,
    QueryTarget,
)
from .schemas.request import DatasourceRequest
from .schemas.response import DatasourceResponse, QueryResult
from .shaping.table import (
    Suggestion,
    events_to_annotation_json,
    logs_to_table,
    names_to_suggestions,
    sort_by_creation_time,
    suggestions_to_table,
)

logger = logging.getLogger(__name__)

# Errors converted into inline error results
HANDLED_ERRORS = (DatasourceError, BotoCoreError, ClientError)


class CloudWatchLogsDatasource:
    """
    Datasource adapter between a visualization host and CloudWatch Logs.

    Example:
        datasource = CloudWatchLogsDatasource()
        response = datasource.query(DatasourceRequest.from_dict(payload))
        for result in response.results:
            print(result.ref_id, result.error)
    """

    def __init__(
        self,
        registry: Optional[ClientRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the datasource.

        Args:
            registry: Client registry (uses the process-wide one if None)
            settings: Settings (uses get_settings() if None)

        Raises:
            ConfigurationError: If settings fail validation
        """
        self._settings = settings or get_settings()
        errors = self._settings.validate()
        if errors:
            raise ConfigurationError("Invalid settings: " + "; ".join(errors))

        self._registry = registry or get_registry()
        self._limits = PaginationLimits.from_settings(self._settings)
        self._tz = self._settings.get_display_tzinfo()

    # =========================================================================
    # Entry Point
    # =========================================================================

    def query(self, request: DatasourceRequest) -> DatasourceResponse:
        """
        Answer a host request.

        Args:
            request: Host request with a time range and one or more queries

        Returns:
            Response with one result per produced table, or a single error
            result when the request fails
        """
        try:
            decoded = decode_request(
                request, default_region=self._settings.default_region
            )
        except QueryDecodeError as e:
            logger.error(f"Failed to decode request: {e}")
            return DatasourceResponse.from_error(str(e), ref_id=e.ref_id or "")

        return self._dispatch(decoded)

    def _dispatch(self, decoded: DecodedQuery) -> DatasourceResponse:
        if isinstance(decoded, MetadataSuggestionQuery):
            return self._guarded(
                lambda: self._handle_metadata(decoded), ref_id=METRIC_FIND_REF_ID
            )
        elif isinstance(decoded, AnnotationQuery):
            return self._guarded(
                lambda: self._handle_annotation(decoded),
                ref_id=decoded.target.ref_id,
            )
        elif isinstance(decoded, LogTableQuery):
            return self._guarded(lambda: self._handle_log_table(decoded))
        raise TypeError(f"Unhandled query variant: {type(decoded).__name__}")

    def _guarded(
        self, handler: Callable[[], DatasourceResponse], ref_id: str = ""
    ) -> DatasourceResponse:
        try:
            return handler()
        except HANDLED_ERRORS as e:
            logger.error(f"Query failed ({type(e).__name__}): {e}")
            return DatasourceResponse.from_error(str(e), ref_id=ref_id)

    # =========================================================================
    # Mode Handlers
    # =========================================================================

    def _handle_metadata(self, query: MetadataSuggestionQuery) -> DatasourceResponse:
        client = self._registry.get_client(query.region)

        suggestions: list[Suggestion] = []
        if query.subtype == SUBTYPE_LOG_GROUP_NAMES:
            groups = list_log_groups(client, query.prefix, self._limits)
            suggestions = names_to_suggestions(
                sort_by_creation_time(groups.items), "logGroupName"
            )
        elif query.subtype == SUBTYPE_LOG_STREAM_NAMES:
            streams = list_log_streams(client, query.log_group_name, self._limits)
            suggestions = names_to_suggestions(
                sort_by_creation_time(streams.items), "logStreamName"
            )
        else:
            logger.info(f"Unknown metadata subtype {query.subtype!r}, no suggestions")

        logger.info(
            f"Metadata lookup {query.subtype!r} in {query.region} "
            f"returned {len(suggestions)} suggestion(s)"
        )
        return DatasourceResponse(
            results=[
                QueryResult(
                    ref_id=METRIC_FIND_REF_ID,
                    tables=[suggestions_to_table(suggestions)],
                )
            ]
        )

    def _handle_annotation(self, query: AnnotationQuery) -> DatasourceResponse:
        events = self._fetch_events(query.target)
        return DatasourceResponse(
            results=[QueryResult(meta_json=events_to_annotation_json(events))]
        )

    def _handle_log_table(self, query: LogTableQuery) -> DatasourceResponse:
        response = DatasourceResponse()

        for target in query.targets:
            if target.format == FORMAT_TIMESERIES:
                raise UnsupportedFormatError(target.format, ref_id=target.ref_id)
            if target.format != FORMAT_TABLE:
                logger.warning(
                    f"Ignoring target {target.ref_id!r} with format {target.format!r}"
                )
                continue

            events = self._fetch_events(target)
            table = logs_to_table(
                events, tz=self._tz, skip_invalid=self._settings.skip_invalid_records
            )
            response.results.append(QueryResult(ref_id=target.ref_id, tables=[table]))

        logger.info(
            f"Log table query returned {len(response.results)} result(s) "
            f"for {len(query.targets)} target(s)"
        )
        return response

    def _fetch_events(self, target: QueryTarget) -> list[dict[str, Any]]:
        client = self._registry.get_client(target.region)
        collection = fetch_all_events(client, target.log_filter, self._limits)
        logger.debug(
            f"Target {target.ref_id!r}: {len(collection.items)} event(s) "
            f"in {collection.pages} page(s)"
            + (" (truncated)" if collection.truncated else "")
        )
        return collection.items
