"""Salesforce adapter for MCP tool invocation."""

import asyncio
import logging
from functools import wraps
from typing import Any, Dict, Mapping, Sequence

from simple_salesforce.exceptions import SalesforceError

from salesforce_mcp.errors import AdapterError, MutationError, RecordNotFoundError
from salesforce_mcp.session.client import SalesforceClient, backend_messages

from . import soql
from . import ActivityResult, MutationResult, QueryResult, RecordResult, SearchResult
from .activities import merge_recent_activities

logger = logging.getLogger(__name__)


def handle_backend_errors(action: str):
    """Decorator to wrap backend failures as ``Failed to <action>: <message>``."""
    def decorator(method):
        @wraps(method)
        async def wrapper(*args, **kwargs):
            try:
                return await method(*args, **kwargs)
            except AdapterError:
                raise
            except SalesforceError as e:
                logger.debug("Salesforce call failed in %s", method.__name__, exc_info=True)
                raise AdapterError(action, ", ".join(backend_messages(e))) from e
            except Exception as e:
                logger.debug("Salesforce call failed in %s", method.__name__, exc_info=True)
                raise AdapterError(action, str(e)) from e
        return wrapper
    return decorator


def _error_messages(errors: Any) -> list:
    """Flatten a create result's ``errors`` (strings or ``{message, ...}`` objects)."""
    messages = []
    for error in errors or []:
        if isinstance(error, Mapping):
            messages.append(str(error.get("message") or error))
        else:
            messages.append(str(error))
    return messages


class SalesforceAdapter:
    """Builds and runs the Salesforce call behind each MCP operation."""

    def __init__(self, client: SalesforceClient):
        self.client = client

    # ========================================================================
    # Scoped and global search
    # ========================================================================

    async def _search(self, soql_query: str, plural: str, term: str) -> QueryResult:
        result = await self.client.query(soql_query)
        total = result.get("totalSize", 0)
        return QueryResult(
            message=f'Found {total} {plural} matching "{term}"',
            total_size=total,
            records=result.get("records", []),
        )

    @handle_backend_errors("search accounts")
    async def search_accounts(self, query: str, limit: int = 10) -> QueryResult:
        return await self._search(soql.search_accounts_query(query, limit), "accounts", query)

    @handle_backend_errors("search contacts")
    async def search_contacts(self, query: str, limit: int = 10) -> QueryResult:
        return await self._search(soql.search_contacts_query(query, limit), "contacts", query)

    @handle_backend_errors("search opportunities")
    async def search_opportunities(self, query: str, limit: int = 10) -> QueryResult:
        return await self._search(
            soql.search_opportunities_query(query, limit), "opportunities", query
        )

    @handle_backend_errors("search leads")
    async def search_leads(self, query: str, limit: int = 10) -> QueryResult:
        return await self._search(soql.search_leads_query(query, limit), "leads", query)

    @handle_backend_errors("search all records")
    async def search_all_records(self, query: str, limit: int = 20) -> SearchResult:
        result = await self.client.search(soql.global_search_query(query, limit))
        return SearchResult(
            message=f'Global search results for "{query}"',
            results=result,
        )

    # ========================================================================
    # Detail lookups
    # ========================================================================

    async def _get_record(
        self,
        sobject: str,
        fields: Sequence[str],
        record_id: str,
        action: str,
    ) -> Dict[str, Any]:
        result = await self.client.query(soql.record_by_id_query(sobject, fields, record_id))
        records = result.get("records") or []
        if result.get("totalSize", len(records)) == 0 or not records:
            raise RecordNotFoundError(action, f"{sobject} with ID {record_id} not found")
        return records[0]

    @handle_backend_errors("get account details")
    async def get_account_details(self, account_id: str) -> RecordResult:
        record = await self._get_record(
            "Account", soql.ACCOUNT_DETAIL_FIELDS, account_id, "get account details"
        )
        return RecordResult(
            message=f"Account details for {record.get('Name')}",
            key="account",
            record=record,
        )

    @handle_backend_errors("get contact details")
    async def get_contact_details(self, contact_id: str) -> RecordResult:
        record = await self._get_record(
            "Contact", soql.CONTACT_DETAIL_FIELDS, contact_id, "get contact details"
        )
        return RecordResult(
            message=f"Contact details for {record.get('FirstName')} {record.get('LastName')}",
            key="contact",
            record=record,
        )

    @handle_backend_errors("get opportunity details")
    async def get_opportunity_details(self, opportunity_id: str) -> RecordResult:
        record = await self._get_record(
            "Opportunity", soql.OPPORTUNITY_DETAIL_FIELDS, opportunity_id,
            "get opportunity details",
        )
        return RecordResult(
            message=f"Opportunity details for {record.get('Name')}",
            key="opportunity",
            record=record,
        )

    # ========================================================================
    # Mutations
    # ========================================================================

    async def _update(
        self,
        sobject: str,
        record_id: str,
        updates: Dict[str, Any],
        action: str,
    ) -> MutationResult:
        try:
            await self.client.update(sobject, record_id, dict(updates))
        except SalesforceError as e:
            raise MutationError(action, backend_messages(e)) from e
        return MutationResult(
            message=f"{sobject} {record_id} updated successfully",
            id=record_id,
        )

    async def _create(
        self,
        sobject: str,
        fields: Dict[str, Any],
        label: str,
        action: str,
    ) -> MutationResult:
        try:
            result = await self.client.create(sobject, dict(fields))
        except SalesforceError as e:
            raise MutationError(action, backend_messages(e)) from e

        result = result or {}
        if not result.get("success"):
            raise MutationError(action, _error_messages(result.get("errors")))
        return MutationResult(
            message=f'{sobject} "{label}" created successfully',
            id=result.get("id", ""),
        )

    @handle_backend_errors("update account")
    async def update_account(self, account_id: str, updates: Dict[str, Any]) -> MutationResult:
        return await self._update("Account", account_id, updates, "update account")

    @handle_backend_errors("update contact")
    async def update_contact(self, contact_id: str, updates: Dict[str, Any]) -> MutationResult:
        return await self._update("Contact", contact_id, updates, "update contact")

    @handle_backend_errors("update opportunity")
    async def update_opportunity(
        self, opportunity_id: str, updates: Dict[str, Any]
    ) -> MutationResult:
        return await self._update("Opportunity", opportunity_id, updates, "update opportunity")

    @handle_backend_errors("create task")
    async def create_task(self, fields: Dict[str, Any], subject: str) -> MutationResult:
        return await self._create("Task", fields, subject, "create task")

    @handle_backend_errors("create account")
    async def create_account(self, fields: Dict[str, Any], name: str) -> MutationResult:
        return await self._create("Account", fields, name, "create account")

    @handle_backend_errors("create contact")
    async def create_contact(self, fields: Dict[str, Any], name: str) -> MutationResult:
        return await self._create("Contact", fields, name, "create contact")

    @handle_backend_errors("create opportunity")
    async def create_opportunity(self, fields: Dict[str, Any], name: str) -> MutationResult:
        return await self._create("Opportunity", fields, name, "create opportunity")

    # ========================================================================
    # Activities
    # ========================================================================

    @handle_backend_errors("get recent activities")
    async def get_recent_activities(self, record_id: str, limit: int = 10) -> ActivityResult:
        tasks, events = await asyncio.gather(
            self.client.query(
                soql.activities_query("Task", soql.TASK_ACTIVITY_FIELDS, record_id, limit)
            ),
            self.client.query(
                soql.activities_query("Event", soql.EVENT_ACTIVITY_FIELDS, record_id, limit)
            ),
        )
        activities = merge_recent_activities(
            tasks.get("records", []), events.get("records", []), limit
        )
        return ActivityResult(
            message=f"Found {len(activities)} recent activities for record {record_id}",
            activities=activities,
        )
