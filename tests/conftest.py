"""Shared fixtures: an in-memory stand-in for the Salesforce client."""

import itertools
import re
from typing import Any, Dict, List, Optional

import pytest
from simple_salesforce.exceptions import SalesforceResourceNotFound

from salesforce_mcp.adapters import SalesforceAdapter
from salesforce_mcp.dispatcher import Dispatcher
from salesforce_mcp.session import BackendSession
from salesforce_mcp.tools import build_registry

_FROM = re.compile(r"\bFROM (\w+)")
_BY_ID = re.compile(r"WHERE Id = '((?:[^'\\]|\\.)*)'")


class FakeSalesforceClient:
    """
    Records every call and answers from in-memory record tables.

    ``query`` returns the rows of the sObject named in the FROM clause,
    filtered by ``Id = '...'`` when present. ``update`` and ``create`` mutate
    the tables so a later query sees the change.
    """

    instance_url = "https://example.my.salesforce.com"
    api_version = "59.0"

    def __init__(self):
        self.records: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.search_response: Any = {"searchRecords": []}
        self.create_response: Optional[Dict[str, Any]] = None
        self.fail_with: Optional[Exception] = None
        self._ids = itertools.count(1)

    def add(self, sobject: str, **fields: Any) -> Dict[str, Any]:
        record = {"attributes": {"type": sobject}, **fields}
        self.records.setdefault(sobject, []).append(record)
        return record

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def query(self, soql: str) -> Dict[str, Any]:
        self.calls.append(("query", soql))
        self._maybe_fail()
        sobject = _FROM.search(soql).group(1)
        rows = list(self.records.get(sobject, []))
        match = _BY_ID.search(soql)
        if match:
            rows = [row for row in rows if row.get("Id") == match.group(1)]
        return {"totalSize": len(rows), "done": True, "records": rows}

    async def search(self, sosl: str) -> Any:
        self.calls.append(("search", sosl))
        self._maybe_fail()
        return self.search_response

    async def create(self, sobject: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create", sobject, fields))
        self._maybe_fail()
        if self.create_response is not None:
            return self.create_response
        record_id = f"{sobject[:3].upper()}{next(self._ids):03d}"
        self.add(sobject, Id=record_id, **fields)
        return {"id": record_id, "success": True, "errors": []}

    async def update(self, sobject: str, record_id: str, fields: Dict[str, Any]) -> None:
        self.calls.append(("update", sobject, record_id, fields))
        self._maybe_fail()
        for row in self.records.get(sobject, []):
            if row.get("Id") == record_id:
                row.update(fields)
                return None
        raise SalesforceResourceNotFound(
            f"https://example.my.salesforce.com/services/data/v59.0/sobjects/{sobject}/{record_id}",
            404,
            sobject,
            [{"errorCode": "NOT_FOUND", "message": "The requested resource does not exist"}],
        )

    async def aclose(self) -> None:
        self.calls.append(("aclose",))

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_client():
    """In-memory Salesforce client."""
    return FakeSalesforceClient()


@pytest.fixture
def adapter(fake_client):
    return SalesforceAdapter(fake_client)


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def session(fake_client):
    """Already-connected session around the fake client."""
    return BackendSession.from_client(fake_client)


@pytest.fixture
def dispatcher(registry, session):
    return Dispatcher(registry, session)


@pytest.fixture(autouse=True)
def clean_salesforce_env(monkeypatch):
    """Keep real SALESFORCE_* variables out of every test."""
    for name in (
        "SALESFORCE_USERNAME",
        "SALESFORCE_PASSWORD",
        "SALESFORCE_SECURITY_TOKEN",
        "SALESFORCE_LOGIN_URL",
        "SALESFORCE_API_VERSION",
        "SALESFORCE_MCP_HOST",
        "SALESFORCE_MCP_PORT",
        "SALESFORCE_MCP_TRANSPORT",
    ):
        monkeypatch.delenv(name, raising=False)
