"""Host request and response schemas."""

from .request import DatasourceRequest, Query, RawTimeRange
from .response import (
    ROW_VALUE_STRING,
    DatasourceResponse,
    QueryResult,
    RowValue,
    Table,
    TableColumn,
    TableRow,
)

__all__ = [
    # Request
    "DatasourceRequest",
    "Query",
    "RawTimeRange",
    # Response
    "DatasourceResponse",
    "QueryResult",
    "Table",
    "TableColumn",
    "TableRow",
    "RowValue",
    "ROW_VALUE_STRING",
]
