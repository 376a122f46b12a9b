"""Process-wide Salesforce connection with init-once semantics."""

import asyncio
import logging
from typing import Callable, Optional

from requests.exceptions import RequestException
from simple_salesforce import Salesforce
from simple_salesforce.exceptions import SalesforceError

from salesforce_mcp.config import SalesforceSettings
from salesforce_mcp.errors import BackendConnectionError, SalesforceMCPError
from salesforce_mcp.session.client import SalesforceClient, backend_messages, open_salesforce

logger = logging.getLogger(__name__)


class BackendSession:
    """
    Owns the single shared SalesforceClient for the server process.

    The first ``connect()`` logs in; concurrent first callers wait on the same
    lock so the login happens at most once. A failed login is remembered and
    re-raised on every later call until the process restarts.
    """

    def __init__(
        self,
        settings_loader: Callable[[], SalesforceSettings] = SalesforceSettings.from_env,
        connector: Callable[[SalesforceSettings], Salesforce] = open_salesforce,
    ):
        self._settings_loader = settings_loader
        self._connector = connector
        self._lock = asyncio.Lock()
        self._client: Optional[SalesforceClient] = None
        self._failure: Optional[SalesforceMCPError] = None

    @classmethod
    def from_client(cls, client: SalesforceClient) -> "BackendSession":
        """Wrap an already-authenticated client."""
        session = cls()
        session._client = client
        return session

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> SalesforceClient:
        """
        Return the shared client, logging in on first use.

        Raises:
            ConfigurationError: If credentials are missing
            BackendConnectionError: If Salesforce rejects the login
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                if self._failure is not None:
                    raise self._failure
                try:
                    self._client = await self._open()
                except SalesforceMCPError as e:
                    self._failure = e
                    raise
            return self._client

    async def _open(self) -> SalesforceClient:
        settings = self._settings_loader()
        try:
            sf = await asyncio.to_thread(self._connector, settings)
        except SalesforceError as e:
            detail = ", ".join(backend_messages(e))
            raise BackendConnectionError(f"Failed to connect to Salesforce: {detail}") from e
        except RequestException as e:
            raise BackendConnectionError(f"Failed to connect to Salesforce: {e}") from e

        client = SalesforceClient(sf)
        logger.info("Successfully connected to Salesforce (%s)", client.instance_url)
        return client

    async def close(self) -> None:
        """Drop the shared client; the next ``connect()`` logs in again."""
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()
