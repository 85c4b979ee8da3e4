"""
Unit tests for the pagination driver.

Tests page accumulation, parameter passing, error propagation and the
page/record bounds.
"""

import pytest
from botocore.exceptions import ClientError

from cloudwatch_logs_datasource.exceptions import PaginationLimitError
from cloudwatch_logs_datasource.fetching import (
    PaginationLimits,
    collect_pages,
    fetch_all_events,
    list_log_groups,
    list_log_streams,
)
from cloudwatch_logs_datasource.query.models import LogFilter
from tests.unit.fakes import FakeLogsClient, client_error, make_event, paged


def event_pages(*sizes: int) -> list[dict]:
    """Pages of events, numbered consecutively across pages."""
    items, counter = [], 0
    for size in sizes:
        page = []
        for _ in range(size):
            page.append(make_event(1700000000000 + counter, f"msg {counter}"))
            counter += 1
        items.append(page)
    return paged(items, "events")


class TestCollectPages:
    """Tests for collect_pages accumulation."""

    def test_accumulates_all_pages_in_order(self):
        """Items from every page are kept, in provider order."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(2, 3, 1))

        collection = collect_pages(
            client, "filter_log_events", "events", {}, PaginationLimits.unbounded()
        )

        assert collection.pages == 3
        assert collection.truncated is False
        assert [e["message"] for e in collection.items] == [
            f"msg {i}" for i in range(6)
        ]

    def test_empty_pages_are_followed(self):
        """Empty pages with a nextToken do not stop the fetch."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(0, 0, 2))

        collection = collect_pages(client, "filter_log_events", "events", {})

        assert collection.pages == 3
        assert len(collection.items) == 2

    def test_page_error_aborts_fetch(self):
        """A failing page discards accumulated items and propagates."""
        pages = event_pages(2, 2)
        pages.insert(1, client_error("ThrottlingException"))
        client = FakeLogsClient().queue("filter_log_events", pages)

        with pytest.raises(ClientError) as exc_info:
            collect_pages(client, "filter_log_events", "events", {})

        assert exc_info.value.response["Error"]["Code"] == "ThrottlingException"


class TestPaginationLimits:
    """Tests for bounded accumulation."""

    def test_max_records_truncates(self):
        """Items beyond max_records are dropped and the result flagged."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(3, 3, 3))
        limits = PaginationLimits(max_pages=None, max_records=4)

        collection = collect_pages(client, "filter_log_events", "events", {}, limits)

        assert collection.truncated is True
        assert collection.pages == 2
        assert [e["message"] for e in collection.items] == [
            "msg 0",
            "msg 1",
            "msg 2",
            "msg 3",
        ]

    def test_exact_fit_on_last_page_is_not_truncated(self):
        """Reaching max_records on the final page is not a truncation."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(2, 2))
        limits = PaginationLimits(max_pages=None, max_records=4)

        collection = collect_pages(client, "filter_log_events", "events", {}, limits)

        assert collection.truncated is False
        assert len(collection.items) == 4

    def test_max_pages_truncates(self):
        """Fetching stops after max_pages when more pages remain."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(1, 1, 1, 1))
        limits = PaginationLimits(max_pages=2, max_records=None)

        collection = collect_pages(client, "filter_log_events", "events", {}, limits)

        assert collection.truncated is True
        assert collection.pages == 2
        assert len(collection.items) == 2

    def test_on_limit_error_raises(self):
        """on_limit='error' turns a bound into a PaginationLimitError."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(2, 2, 2))
        limits = PaginationLimits(max_pages=1, max_records=None, on_limit="error")

        with pytest.raises(PaginationLimitError) as exc_info:
            collect_pages(client, "filter_log_events", "events", {}, limits)

        assert exc_info.value.operation == "filter_log_events"
        assert exc_info.value.pages == 1
        assert exc_info.value.records == 2

    def test_from_settings_zero_means_unbounded(self, settings):
        """A zero bound in settings disables that bound."""
        settings.max_pages = 0
        settings.max_records = 0

        limits = PaginationLimits.from_settings(settings)

        assert limits.max_pages is None
        assert limits.max_records is None


class TestOperationWrappers:
    """Tests for the per-operation convenience functions."""

    def test_fetch_all_events_passes_filter_params(self):
        """The filter descriptor becomes filter_log_events parameters."""
        client = FakeLogsClient().queue("filter_log_events", event_pages(1))
        log_filter = LogFilter(
            log_group_name="/app/api",
            log_stream_name_prefix="web-",
            filter_pattern="ERROR",
            start_ms=10,
            end_ms=20,
        )

        fetch_all_events(client, log_filter)

        assert client.calls == [
            (
                "filter_log_events",
                {
                    "logGroupName": "/app/api",
                    "logStreamNamePrefix": "web-",
                    "filterPattern": "ERROR",
                    "startTime": 10,
                    "endTime": 20,
                },
            )
        ]

    def test_list_log_groups_omits_empty_prefix(self):
        """An empty prefix lists every group."""
        client = FakeLogsClient().queue(
            "describe_log_groups", paged([[{"logGroupName": "/a"}]], "logGroups")
        )

        collection = list_log_groups(client, "")

        assert client.calls == [("describe_log_groups", {})]
        assert collection.items == [{"logGroupName": "/a"}]

    def test_list_log_groups_passes_prefix(self):
        """A prefix narrows the listing."""
        client = FakeLogsClient().queue("describe_log_groups", [{"logGroups": []}])

        list_log_groups(client, "/aws/lambda")

        assert client.calls == [
            ("describe_log_groups", {"logGroupNamePrefix": "/aws/lambda"})
        ]

    def test_list_log_streams_passes_group(self):
        """Streams are listed within the named group."""
        client = FakeLogsClient().queue(
            "describe_log_streams",
            paged([[{"logStreamName": "s1"}], [{"logStreamName": "s2"}]], "logStreams"),
        )

        collection = list_log_streams(client, "/app/api")

        assert client.calls == [("describe_log_streams", {"logGroupName": "/app/api"})]
        assert [s["logStreamName"] for s in collection.items] == ["s1", "s2"]
