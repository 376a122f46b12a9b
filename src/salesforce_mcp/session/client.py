"""Async access to a simple_salesforce connection."""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from simple_salesforce import Salesforce
from simple_salesforce.exceptions import SalesforceAuthenticationFailed, SalesforceError

from salesforce_mcp.config import SalesforceSettings

logger = logging.getLogger(__name__)


def open_salesforce(settings: SalesforceSettings) -> Salesforce:
    """
    Log in with username, password and security token.

    Blocks on the SOAP login round trip; callers on the event loop run it
    in a worker thread.

    Raises:
        SalesforceAuthenticationFailed: If Salesforce rejects the credentials
        requests.exceptions.RequestException: If the login endpoint cannot be reached
    """
    return Salesforce(
        username=settings.username,
        password=settings.password,
        security_token=settings.security_token,
        domain=settings.domain,
        version=settings.api_version,
    )


def backend_messages(error: SalesforceError) -> List[str]:
    """Salesforce error text carried by a simple_salesforce exception."""
    if isinstance(error, SalesforceAuthenticationFailed):
        return [str(error)]

    content: Any = getattr(error, "content", None)
    if isinstance(content, Mapping):
        content = [content]
    if isinstance(content, list):
        messages = []
        for item in content:
            if isinstance(item, Mapping):
                messages.append(str(item.get("message") or item.get("errorCode") or item))
            else:
                messages.append(str(item))
        return messages
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    return [content] if content else [str(error)]


class SalesforceClient:
    """
    Shared handle over one authenticated ``simple_salesforce.Salesforce``.

    simple_salesforce is blocking, so every call runs in a worker thread and
    independent calls can be awaited together.
    """

    def __init__(self, sf: Salesforce):
        self.sf = sf

    @property
    def instance_url(self) -> str:
        return f"https://{self.sf.sf_instance}"

    @property
    def api_version(self) -> str:
        return self.sf.sf_version

    async def query(self, soql: str) -> Dict[str, Any]:
        """Run a SOQL query; returns ``{totalSize, done, records}``."""
        return await asyncio.to_thread(self.sf.query, soql)

    async def search(self, sosl: str) -> Optional[Dict[str, Any]]:
        """Run a SOSL search; returns ``{searchRecords}``."""
        return await asyncio.to_thread(self.sf.search, sosl)

    async def create(self, sobject: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a record; returns ``{id, success, errors}``."""
        return await asyncio.to_thread(getattr(self.sf, sobject).create, fields)

    async def update(self, sobject: str, record_id: str, fields: Dict[str, Any]) -> None:
        """Update a record in place."""
        await asyncio.to_thread(getattr(self.sf, sobject).update, record_id, fields)

    async def aclose(self) -> None:
        self.sf.session.close()
