"""
Host request schema.

The host sends a time range as decimal-string epoch milliseconds and an
ordered list of queries, each carrying an opaque JSON model.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import QueryDecodeError


@dataclass
class RawTimeRange:
    """Time range boundaries exactly as sent by the host."""

    from_raw: str
    to_raw: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"fromRaw": self.from_raw, "toRaw": self.to_raw}


@dataclass
class Query:
    """One query of a request: reference id plus raw JSON model."""

    ref_id: str
    model_json: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"refId": self.ref_id, "modelJson": self.model_json}


@dataclass
class DatasourceRequest:
    """A host request: one shared time range, one or more queries."""

    time_range: RawTimeRange
    queries: list[Query] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "timeRange": self.time_range.to_dict(),
            "queries": [q.to_dict() for q in self.queries],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DatasourceRequest":
        """
        Create a request from its JSON transport form.

        `modelJson` may be given either as a JSON string or as an object,
        which is re-serialized.

        Args:
            data: Dictionary with `timeRange` and `queries`

        Returns:
            DatasourceRequest instance

        Raises:
            QueryDecodeError: If required keys are missing or mistyped
        """
        if not isinstance(data, dict):
            raise QueryDecodeError("Request must be a JSON object")

        time_range = data.get("timeRange")
        if not isinstance(time_range, dict):
            raise QueryDecodeError("Missing timeRange", field="timeRange")

        queries = data.get("queries", [])
        if not isinstance(queries, list):
            raise QueryDecodeError(
                "queries must be a list", field="queries", value=queries
            )

        parsed = []
        for query in queries:
            if not isinstance(query, dict):
                raise QueryDecodeError("Query must be a JSON object", value=query)
            model = query.get("modelJson", "{}")
            if not isinstance(model, str):
                model = json.dumps(model)
            parsed.append(Query(ref_id=str(query.get("refId", "")), model_json=model))

        return cls(
            time_range=RawTimeRange(
                from_raw=str(time_range.get("fromRaw", "")),
                to_raw=str(time_range.get("toRaw", "")),
            ),
            queries=parsed,
        )
