"""
MCP tool definitions for Salesforce operations.

Domain-grouped modules declare each operation's schema, typed request and
handler. ``build_registry()`` assembles them into the server's catalog in the
order clients see them.
"""

from salesforce_mcp.registry import OperationRegistry

from .activity_tools import (
    CREATE_TASK_OPERATION,
    RECENT_ACTIVITIES_OPERATION,
    CreateTaskRequest,
    RecentActivitiesRequest,
)
from .record_tools import (
    CreateAccountRequest,
    CreateContactRequest,
    CreateOpportunityRequest,
    RecordRequest,
    UpdateRequest,
    create_operations,
    detail_operations,
    update_operations,
)
from .search_tools import (
    GLOBAL_SEARCH_OPERATION,
    GlobalSearchRequest,
    SearchRequest,
    search_operations,
)


def build_registry() -> OperationRegistry:
    """Create a registry holding all sixteen Salesforce operations."""
    return OperationRegistry([
        *search_operations(),
        *detail_operations(),
        *update_operations(),
        RECENT_ACTIVITIES_OPERATION,
        CREATE_TASK_OPERATION,
        *create_operations(),
        GLOBAL_SEARCH_OPERATION,
    ])


__all__ = [
    "build_registry",
    "CreateAccountRequest",
    "CreateContactRequest",
    "CreateOpportunityRequest",
    "CreateTaskRequest",
    "GlobalSearchRequest",
    "RecentActivitiesRequest",
    "RecordRequest",
    "SearchRequest",
    "UpdateRequest",
]
