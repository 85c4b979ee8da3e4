"""
Host response schema.

A response is an ordered list of per-target results. A result carries a
reference id and any of: an error string, one or more generic tables,
or an opaque metadata JSON string (annotation mode).
"""

from dataclasses import dataclass, field
from typing import Optional

import pandas as pd

ROW_VALUE_STRING = "string"


@dataclass(frozen=True)
class TableColumn:
    """A named table column."""

    name: str


@dataclass(frozen=True)
class RowValue:
    """A typed table cell."""

    kind: str
    string_value: str = ""

    @classmethod
    def string(cls, value: str) -> "RowValue":
        """Create a string-kind cell."""
        return cls(kind=ROW_VALUE_STRING, string_value=value)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"kind": self.kind, "stringValue": self.string_value}


@dataclass
class TableRow:
    """One table row, values in column order."""

    values: list[RowValue] = field(default_factory=list)


@dataclass
class Table:
    """
    Generic table: ordered columns plus ordered rows.

    Every row holds exactly one value per column.
    """

    columns: list[TableColumn] = field(default_factory=list)
    rows: list[TableRow] = field(default_factory=list)

    @classmethod
    def with_columns(cls, names: list[str]) -> "Table":
        """Create an empty table with the given column names."""
        return cls(columns=[TableColumn(name=name) for name in names])

    @property
    def column_names(self) -> list[str]:
        """Column names in order."""
        return [column.name for column in self.columns]

    def add_row(self, values: list[RowValue]) -> None:
        """
        Append a row.

        Raises:
            ValueError: If the value count differs from the column count
        """
        if len(values) != len(self.columns):
            raise ValueError(
                f"Row has {len(values)} value(s) but table has "
                f"{len(self.columns)} column(s)"
            )
        self.rows.append(TableRow(values=list(values)))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "columns": [{"name": column.name} for column in self.columns],
            "rows": [
                {"values": [value.to_dict() for value in row.values]}
                for row in self.rows
            ],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a pandas DataFrame of cell string values."""
        return pd.DataFrame(
            [[value.string_value for value in row.values] for row in self.rows],
            columns=self.column_names,
        )


@dataclass
class QueryResult:
    """Result for one target (or one request-wide error)."""

    ref_id: str = ""
    error: Optional[str] = None
    tables: list[Table] = field(default_factory=list)
    meta_json: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """True if this result reports a failure."""
        return bool(self.error)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result: dict = {"refId": self.ref_id}
        if self.error:
            result["error"] = self.error
        if self.tables:
            result["tables"] = [table.to_dict() for table in self.tables]
        if self.meta_json is not None:
            result["metaJson"] = self.meta_json
        return result


@dataclass
class DatasourceResponse:
    """Response envelope: one result per target, in target order."""

    results: list[QueryResult] = field(default_factory=list)

    @classmethod
    def from_error(cls, message: str, ref_id: str = "") -> "DatasourceResponse":
        """Create an envelope holding a single error result."""
        return cls(results=[QueryResult(ref_id=ref_id, error=message)])

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"results": [result.to_dict() for result in self.results]}
