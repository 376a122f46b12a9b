"""
Salesforce adapter layer for MCP tool integration.

Builds and executes the backend query or mutation for each operation and
returns one of a small set of result types. Every result type shapes itself
into the uniform MCP response envelope through ``to_envelope()``.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class OperationResult:
    """Base result; subclasses define the JSON payload in ``to_dict()``."""

    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}

    def to_text(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_envelope(self) -> Dict[str, Any]:
        """Serialize to the MCP response envelope (one text block)."""
        return {"content": [{"type": "text", "text": self.to_text()}]}


@dataclass
class QueryResult(OperationResult):
    """Rows returned by a scoped search."""

    total_size: int = 0
    records: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalSize": self.total_size,
            "records": self.records,
            "message": self.message,
        }


@dataclass
class RecordResult(OperationResult):
    """A single record, keyed by its kind (``account``, ``contact``, ...)."""

    key: str = "record"
    record: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {self.key: self.record, "message": self.message}


@dataclass
class MutationResult(OperationResult):
    """A successful create or update."""

    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "id": self.id, "message": self.message}


@dataclass
class ActivityResult(OperationResult):
    """Merged Task and Event rows for one record."""

    activities: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalActivities": len(self.activities),
            "activities": self.activities,
            "message": self.message,
        }


@dataclass
class SearchResult(OperationResult):
    """Raw SOSL response from a global search."""

    results: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {"searchResults": self.results, "message": self.message}


from .salesforce_adapter import SalesforceAdapter  # noqa: E402

__all__ = [
    "ActivityResult",
    "MutationResult",
    "OperationResult",
    "QueryResult",
    "RecordResult",
    "SalesforceAdapter",
    "SearchResult",
]
