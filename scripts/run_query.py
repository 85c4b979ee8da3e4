#!/usr/bin/env python3
"""
CLI script to run a datasource query against CloudWatch Logs.

Usage:
    # Search a log group over the last hour
    python scripts/run_query.py --log-group /aws/lambda/api --start "1 hour ago"

    # Replay a host request captured as JSON
    python scripts/run_query.py --request request.json --json
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cloudwatch_logs_datasource import CloudWatchLogsDatasource, DatasourceRequest
from cloudwatch_logs_datasource.config import (
    QUERY_TYPE_METRIC_FIND,
    SUBTYPE_LOG_GROUP_NAMES,
    SUBTYPE_LOG_STREAM_NAMES,
    get_settings,
)
from cloudwatch_logs_datasource.utils import setup_logging, to_epoch_millis


def parse_time(value: str) -> int:
    """Parse a time argument into epoch milliseconds."""
    text = value.strip()
    if text.endswith(" ago"):
        amount, _, unit = text[: -len(" ago")].partition(" ")
        units = {"minute": "minutes", "hour": "hours", "day": "days"}
        unit = units.get(unit.rstrip("s"), unit)
        try:
            delta = timedelta(**{unit: int(amount)})
        except (TypeError, ValueError):
            raise argparse.ArgumentTypeError(f"Invalid relative time: {value}")
        return to_epoch_millis(datetime.now(timezone.utc) - delta)
    try:
        return to_epoch_millis(text)
    except (ValueError, OverflowError):
        raise argparse.ArgumentTypeError(
            f"Invalid time: {value}. Use epoch ms, ISO-8601 or 'N hours ago'"
        )


def build_request(args: argparse.Namespace) -> DatasourceRequest:
    """Build a host request from command-line arguments."""
    if args.request:
        with open(args.request, encoding="utf-8") as f:
            return DatasourceRequest.from_dict(json.load(f))

    end = args.end if args.end is not None else to_epoch_millis(datetime.now(timezone.utc))
    start = args.start if args.start is not None else end - 3600 * 1000

    if args.list:
        model = {
            "queryType": QUERY_TYPE_METRIC_FIND,
            "region": args.region,
            "subtype": args.list,
            "prefix": args.prefix or "",
            "logGroupName": args.log_group or "",
        }
    else:
        log_filter = {"logGroupName": args.log_group}
        if args.stream_prefix:
            log_filter["logStreamNamePrefix"] = args.stream_prefix
        if args.pattern:
            log_filter["filterPattern"] = args.pattern
        model = {
            "refId": "A",
            "format": "table",
            "region": args.region,
            "input": log_filter,
        }

    return DatasourceRequest.from_dict(
        {
            "timeRange": {"fromRaw": str(start), "toRaw": str(end)},
            "queries": [{"refId": "A", "modelJson": model}],
        }
    )


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a CloudWatch Logs datasource query",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search a log group for errors in the last 2 hours
  python scripts/run_query.py --log-group /aws/lambda/api --pattern ERROR --start "2 hours ago"

  # List log groups by prefix
  python scripts/run_query.py --list log_group_names --prefix /aws/lambda

  # Replay a captured host request, output as JSON
  python scripts/run_query.py --request request.json --json
        """,
    )

    parser.add_argument(
        "--request",
        type=Path,
        help="Path to a host request JSON file (overrides query options)",
    )
    parser.add_argument("--region", help="AWS region (default: from settings)")
    parser.add_argument("--log-group", help="Log group name")
    parser.add_argument("--stream-prefix", help="Log stream name prefix")
    parser.add_argument("--pattern", help="CloudWatch filter pattern")
    parser.add_argument(
        "--start",
        type=parse_time,
        help="Start time: epoch ms, ISO-8601 or 'N hours ago' (default: 1 hour ago)",
    )
    parser.add_argument(
        "--end",
        type=parse_time,
        help="End time: epoch ms, ISO-8601 or 'N hours ago' (default: now)",
    )
    parser.add_argument(
        "--list",
        choices=[SUBTYPE_LOG_GROUP_NAMES, SUBTYPE_LOG_STREAM_NAMES],
        help="Run a metadata lookup instead of a log search",
    )
    parser.add_argument("--prefix", help="Log group name prefix for --list")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config (default: config.enc.yaml, config.yaml, env)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the raw response as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if not args.request and not args.log_group and args.list != SUBTYPE_LOG_GROUP_NAMES:
        parser.error("Must specify --request, --log-group or --list log_group_names")

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    settings = get_settings(str(args.config) if args.config else None)
    if not args.region:
        args.region = settings.default_region

    datasource = CloudWatchLogsDatasource(settings=settings)
    response = datasource.query(build_request(args))

    if args.json:
        print(json.dumps(response.to_dict(), indent=2, default=str))
        return 0 if not any(r.is_error for r in response.results) else 1

    exit_code = 0
    for result in response.results:
        print(f"\n📈 {result.ref_id or '(no refId)'}")
        print("-" * 40)
        if result.error:
            print(f"  ❌ {result.error}")
            exit_code = 1
        for table in result.tables:
            df = table.to_dataframe()
            if df.empty:
                print("  (no rows)")
            else:
                print(df.to_string(index=False))
        if result.meta_json is not None:
            events = json.loads(result.meta_json).get("Events") or []
            print(f"  {len(events)} annotation event(s)")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
