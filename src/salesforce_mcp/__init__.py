"""
Salesforce MCP server.

Exposes Salesforce CRM search, lookup, update and create operations as Model
Context Protocol tools.
"""

__version__ = "0.1.0"
