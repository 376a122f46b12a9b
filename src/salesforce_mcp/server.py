"""
FastMCP server initialization and configuration.

Main server class that handles MCP protocol communication, the shared
Salesforce session and tool registration. Supports stdio, SSE and streamable
HTTP transports.
"""

import logging
import socket
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

from fastmcp import FastMCP
from fastmcp.tools import Tool, ToolResult
from pydantic import Field

from salesforce_mcp import __version__
from salesforce_mcp.config import VALID_TRANSPORTS
from salesforce_mcp.dispatcher import Dispatcher
from salesforce_mcp.errors import SalesforceMCPError
from salesforce_mcp.registry import OperationDescriptor, OperationRegistry
from salesforce_mcp.session import BackendSession

logger = logging.getLogger(__name__)

SERVER_NAME = "salesforce-mcp-server"
ERROR_META_KEY = "error"


class DispatchedTool(Tool):
    """FastMCP tool that forwards every call to the Dispatcher."""

    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        """
        Run the operation and wrap its envelope as the tool result.

        Failures come back as an error result whose ``_meta.error`` carries
        the machine-checkable ``kind`` and JSON-RPC ``code``.
        """
        try:
            envelope = await self.dispatcher.dispatch(self.name, arguments)
        except SalesforceMCPError as e:
            return ToolResult(
                content=e.message,
                meta={ERROR_META_KEY: {"kind": e.kind, "code": e.code}},
                is_error=True,
            )
        return ToolResult(content=envelope["content"][0]["text"])


@dataclass
class MCPServer:
    """
    Main MCP server instance for the Salesforce CRM tools.

    Owns the FastMCP app, the process-wide Salesforce session and the
    operation registry, and routes tool invocations through the Dispatcher.

    Attributes:
        host: Server bind address (default: "127.0.0.1")
        port: Server port (default: 8000, SSE/HTTP only)
        transport: Transport mode ("stdio", "sse" or "http")
        connect_on_startup: Log in to Salesforce before serving requests
        session: Shared Salesforce session
        registry: Operation catalog (default: all Salesforce operations)
    """

    host: str = "127.0.0.1"
    port: int = 8000
    transport: Literal["stdio", "sse", "http"] = "stdio"
    connect_on_startup: bool = True
    session: BackendSession = field(default_factory=BackendSession)
    registry: Optional[OperationRegistry] = None
    _app: Optional[FastMCP] = field(default=None, init=False, repr=False)
    _dispatcher: Optional[Dispatcher] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Validate configuration and build the FastMCP app."""
        if self.transport not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid transport '{self.transport}'. "
                f"Must be one of: {', '.join(VALID_TRANSPORTS)}."
            )

        if self.registry is None:
            from salesforce_mcp.tools import build_registry
            self.registry = build_registry()

        self._dispatcher = Dispatcher(self.registry, self.session)
        self._app = FastMCP(SERVER_NAME, version=__version__, lifespan=self._lifespan)
        self._register_tools()

    @property
    def app(self) -> FastMCP:
        return self._app

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @asynccontextmanager
    async def _lifespan(self, app: FastMCP):
        """
        Connect to Salesforce before the first request when configured to.

        The session outlives any one client connection; nothing is torn down.
        """
        if self.connect_on_startup:
            await self.session.connect()
        logger.info("Salesforce MCP server running on %s", self.transport)
        yield {}

    def _check_port_available(self, host: str, port: int) -> bool:
        """
        Check if port is available for binding.

        Args:
            host: Host address to check
            port: Port number to check

        Returns:
            True if port is available, False otherwise
        """
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((host, port))
                return True
        except OSError:
            return False

    def _register_tools(self):
        """Register every registry operation as an MCP tool."""
        for descriptor in self.registry.list():
            self.register_tool(descriptor)

    def register_tool(self, descriptor: OperationDescriptor) -> Tool:
        """
        Register one operation with the FastMCP app.

        Args:
            descriptor: Operation to expose; its schema is advertised verbatim

        Returns:
            The registered FastMCP tool
        """
        if not self._app:
            raise RuntimeError("FastMCP app not initialized")

        tool = DispatchedTool(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.to_tool()["inputSchema"],
            dispatcher=self._dispatcher,
        )
        return self._app.add_tool(tool)

    def start(self):
        """
        Start the MCP server with the configured transport.

        Raises:
            RuntimeError: If the port is unavailable (SSE/HTTP) or FastMCP fails to start
        """
        if not self._app:
            raise RuntimeError("FastMCP app not initialized. This should not happen.")

        if self.transport == "stdio":
            # stdout carries JSON-RPC frames; host/port are ignored
            try:
                self._app.run(transport="stdio")
            except SalesforceMCPError:
                raise
            except Exception as e:
                raise RuntimeError(f"Failed to start MCP server with stdio transport: {e}") from e
            return

        if not self._check_port_available(self.host, self.port):
            raise RuntimeError(
                f"Port {self.port} already in use. "
                f"Choose a different port or stop the conflicting service."
            )

        try:
            self._app.run(transport=self.transport, host=self.host, port=self.port)
        except SalesforceMCPError:
            raise
        except Exception as e:
            raise RuntimeError(
                f"Failed to start MCP server on {self.host}:{self.port}: {e}"
            ) from e
