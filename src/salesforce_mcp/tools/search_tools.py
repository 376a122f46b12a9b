"""MCP tools for Salesforce search operations.

This module provides the search operations:
- search_accounts: LIKE search over account name, industry, city and type
- search_contacts: LIKE search over contact name, email, title and account
- search_opportunities: LIKE search over opportunity name, stage and account
- search_leads: LIKE search over lead name, email, company and industry
- search_all_records: SOSL global search across all four objects
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from salesforce_mcp.adapters import OperationResult, SalesforceAdapter
from salesforce_mcp.registry import OperationDescriptor

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_GLOBAL_SEARCH_LIMIT = 20


def search_schema(query_description: str, default_limit: int = DEFAULT_SEARCH_LIMIT) -> Dict[str, Any]:
    """JSON schema shared by every search operation."""
    return {
        "type": "object",
        "required": ["query"],
        "properties": {
            "query": {
                "type": "string",
                "description": query_description,
            },
            "limit": {
                "type": "integer",
                "description": f"Maximum number of results to return (default: {default_limit})",
                "default": default_limit,
                "minimum": 1,
            },
        },
    }


@dataclass(frozen=True)
class SearchRequest:
    query: str
    limit: int = DEFAULT_SEARCH_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SearchRequest":
        return cls(query=arguments["query"], limit=arguments.get("limit", DEFAULT_SEARCH_LIMIT))


@dataclass(frozen=True)
class GlobalSearchRequest(SearchRequest):
    limit: int = DEFAULT_GLOBAL_SEARCH_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GlobalSearchRequest":
        return cls(
            query=arguments["query"],
            limit=arguments.get("limit", DEFAULT_GLOBAL_SEARCH_LIMIT),
        )


async def search_accounts(adapter: SalesforceAdapter, request: SearchRequest) -> OperationResult:
    return await adapter.search_accounts(request.query, request.limit)


async def search_contacts(adapter: SalesforceAdapter, request: SearchRequest) -> OperationResult:
    return await adapter.search_contacts(request.query, request.limit)


async def search_opportunities(adapter: SalesforceAdapter, request: SearchRequest) -> OperationResult:
    return await adapter.search_opportunities(request.query, request.limit)


async def search_leads(adapter: SalesforceAdapter, request: SearchRequest) -> OperationResult:
    return await adapter.search_leads(request.query, request.limit)


async def search_all_records(
    adapter: SalesforceAdapter, request: GlobalSearchRequest
) -> OperationResult:
    return await adapter.search_all_records(request.query, request.limit)


def search_operations() -> List[OperationDescriptor]:
    """Descriptors for the scoped searches."""
    return [
        OperationDescriptor(
            name="search_accounts",
            description="Search for Salesforce accounts by name, industry, or other criteria",
            input_schema=search_schema("Search query for account name or other fields"),
            parse_request=SearchRequest.from_arguments,
            handler=search_accounts,
        ),
        OperationDescriptor(
            name="search_contacts",
            description="Search for Salesforce contacts by name, email, or other criteria",
            input_schema=search_schema("Search query for contact name, email, or other fields"),
            parse_request=SearchRequest.from_arguments,
            handler=search_contacts,
        ),
        OperationDescriptor(
            name="search_opportunities",
            description="Search for Salesforce opportunities by name, stage, or other criteria",
            input_schema=search_schema("Search query for opportunity name, stage, or other fields"),
            parse_request=SearchRequest.from_arguments,
            handler=search_opportunities,
        ),
        OperationDescriptor(
            name="search_leads",
            description="Search for Salesforce leads by name, company, or other criteria",
            input_schema=search_schema("Search query for lead name, company, or other fields"),
            parse_request=SearchRequest.from_arguments,
            handler=search_leads,
        ),
    ]


GLOBAL_SEARCH_OPERATION = OperationDescriptor(
    name="search_all_records",
    description="Search across all Salesforce records using SOSL (global search)",
    input_schema=search_schema(
        "Search query to find across all records", DEFAULT_GLOBAL_SEARCH_LIMIT
    ),
    parse_request=GlobalSearchRequest.from_arguments,
    handler=search_all_records,
)
