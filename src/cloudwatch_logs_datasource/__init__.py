"""
CloudWatch Logs datasource for visualization hosts.

Translates host query requests (time range plus per-panel query models)
into paginated CloudWatch Logs API calls and reshapes the results into
generic tables or annotation payloads.

Usage:
    from cloudwatch_logs_datasource import (
        CloudWatchLogsDatasource,
        DatasourceRequest,
    )

    datasource = CloudWatchLogsDatasource()
    request = DatasourceRequest.from_dict({
        "timeRange": {"fromRaw": "1700000000000", "toRaw": "1700003600000"},
        "queries": [{
            "refId": "A",
            "modelJson": {
                "refId": "A",
                "format": "table",
                "region": "us-east-1",
                "input": {"logGroupName": "/aws/lambda/api"},
            },
        }],
    })
    for result in datasource.query(request).results:
        print(result.ref_id, result.tables[0].to_dataframe())
"""

from .client import ClientRegistry, get_registry
from .datasource import CloudWatchLogsDatasource
from .exceptions import (
    ConfigurationError,
    DatasourceError,
    PaginationLimitError,
    QueryDecodeError,
    RecordValidationError,
    UnsupportedFormatError,
)
from .schemas import DatasourceRequest, DatasourceResponse, QueryResult, Table

__all__ = [
    # Entry point
    "CloudWatchLogsDatasource",
    # Clients
    "ClientRegistry",
    "get_registry",
    # Schemas
    "DatasourceRequest",
    "DatasourceResponse",
    "QueryResult",
    "Table",
    # Exceptions
    "DatasourceError",
    "ConfigurationError",
    "QueryDecodeError",
    "UnsupportedFormatError",
    "RecordValidationError",
    "PaginationLimitError",
]
