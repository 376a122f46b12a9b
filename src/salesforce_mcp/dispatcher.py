"""
Invocation dispatch for the Salesforce MCP server.

Validates an inbound (name, arguments) pair against the registry, makes sure
the shared Salesforce session is connected, builds the typed request and runs
the operation's handler. Handler failures come back as ExecutionError.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from salesforce_mcp.adapters import SalesforceAdapter
from salesforce_mcp.errors import AdapterError, ExecutionError, InvalidArgumentError
from salesforce_mcp.registry import OperationRegistry
from salesforce_mcp.session import BackendSession, SalesforceClient

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes tool invocations to registered operation handlers."""

    def __init__(
        self,
        registry: OperationRegistry,
        session: BackendSession,
        adapter_factory: Callable[[SalesforceClient], Any] = SalesforceAdapter,
    ):
        self.registry = registry
        self.session = session
        self.adapter_factory = adapter_factory

    async def dispatch(
        self, name: str, arguments: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Execute one invocation and return its response envelope.

        Args:
            name: Operation name
            arguments: Invocation arguments (None is rejected)

        Returns:
            ``{"content": [{"type": "text", "text": ...}]}``

        Raises:
            InvalidArgumentError: If arguments are missing or fail validation
            UnknownOperationError: If no operation has this name
            ConfigurationError: If Salesforce credentials are missing
            BackendConnectionError: If the Salesforce login fails
            ExecutionError: If the handler fails
        """
        if arguments is None:
            raise InvalidArgumentError("Missing arguments")

        descriptor = self.registry.get(name)
        normalized = self.registry.validate(name, arguments)

        client = await self.session.connect()

        try:
            request = descriptor.parse_request(normalized)
            result = await descriptor.handler(self.adapter_factory(client), request)
        except AdapterError as e:
            logger.debug("%s failed: %s", name, e)
            raise ExecutionError(name, str(e)) from e
        except Exception as e:
            logger.exception("Unexpected error executing %s", name)
            raise ExecutionError(name, str(e)) from e

        return result.to_envelope()
