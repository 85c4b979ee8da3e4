"""
Constants for query modes, output formats and table schemas.
"""

# =============================================================================
# Query Modes
# =============================================================================

# Values of the `queryType` field in a query model.
# An absent or empty queryType selects the log table mode.
QUERY_TYPE_METRIC_FIND = "metricFindQuery"
QUERY_TYPE_ANNOTATION = "annotationQuery"

# Reference id attached to metadata-suggestion results (success and error)
METRIC_FIND_REF_ID = "metricFindQuery"

# =============================================================================
# Output Formats
# =============================================================================

FORMAT_TABLE = "table"
FORMAT_TIMESERIES = "timeserie"  # Rejected as unsupported

# =============================================================================
# Metadata Suggestion Subtypes
# =============================================================================

SUBTYPE_LOG_GROUP_NAMES = "log_group_names"
SUBTYPE_LOG_STREAM_NAMES = "log_stream_names"

# =============================================================================
# Table Schemas
# =============================================================================

# Column order for log search results
LOG_TABLE_COLUMNS = ["Timestamp", "IngestionTime", "LogStreamName", "Message"]

# Column order for metadata suggestions
SUGGESTION_TABLE_COLUMNS = ["text", "value"]

# =============================================================================
# Provider Operations
# =============================================================================

# (operation name, result key) pairs for boto3 paginators
OP_FILTER_LOG_EVENTS = ("filter_log_events", "events")
OP_DESCRIBE_LOG_GROUPS = ("describe_log_groups", "logGroups")
OP_DESCRIBE_LOG_STREAMS = ("describe_log_streams", "logStreams")

# boto3 service name for CloudWatch Logs
LOGS_SERVICE_NAME = "logs"

# =============================================================================
# Pagination Bounds
# =============================================================================

DEFAULT_MAX_PAGES = 100
DEFAULT_MAX_RECORDS = 10000
ON_LIMIT_TRUNCATE = "truncate"
ON_LIMIT_ERROR = "error"
ON_LIMIT_CHOICES = (ON_LIMIT_TRUNCATE, ON_LIMIT_ERROR)

DEFAULT_REGION = "us-east-1"
DEFAULT_DISPLAY_TIMEZONE = "UTC"

# Appended to the botocore user agent of every client
USER_AGENT_EXTRA = "cloudwatch-logs-datasource"
