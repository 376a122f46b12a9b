"""
Error taxonomy for the Salesforce MCP server.

Every error carries a ``kind`` (the protocol-level category reported to MCP
clients) and the matching JSON-RPC ``code``. Nothing here is retried: errors
are wrapped with an operation-specific prefix and re-raised to the transport
boundary.
"""

from typing import List, Optional

from mcp_types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class SalesforceMCPError(Exception):
    """Base class for all errors raised by this package."""

    kind = "InternalError"
    code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(SalesforceMCPError):
    """Required connection settings are missing or malformed."""


class BackendConnectionError(SalesforceMCPError):
    """Authentication against Salesforce failed."""


class InvalidArgumentError(SalesforceMCPError):
    """Invocation arguments are absent or violate the operation schema."""

    kind = "InvalidParams"
    code = INVALID_PARAMS

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = problems or [message]


class UnknownOperationError(SalesforceMCPError):
    """Invocation names an operation that is not registered."""

    kind = "MethodNotFound"
    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class AdapterError(SalesforceMCPError):
    """A backend query or mutation failed."""

    def __init__(self, action: str, detail: str):
        super().__init__(f"Failed to {action}: {detail}")
        self.action = action
        self.detail = detail


class RecordNotFoundError(AdapterError):
    """A single-record lookup matched zero rows."""


class MutationError(AdapterError):
    """Salesforce rejected a create or update; ``errors`` holds its messages."""

    def __init__(self, action: str, errors: List[str]):
        super().__init__(action, ", ".join(errors) if errors else "unknown error")
        self.errors = list(errors)


class ExecutionError(SalesforceMCPError):
    """Catch-all wrapper for any failure raised while a handler runs."""

    def __init__(self, operation: str, detail: str):
        super().__init__(f"Error executing {operation}: {detail}")
        self.operation = operation
        self.detail = detail
