"""Salesforce connection handling for the MCP server."""

from .client import SalesforceClient, backend_messages, open_salesforce
from .connection import BackendSession

__all__ = ["BackendSession", "SalesforceClient", "backend_messages", "open_salesforce"]
