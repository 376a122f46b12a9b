"""
Operation registry for the Salesforce MCP server.

Static catalog of every operation the server exposes: name, description,
JSON parameter schema, typed request builder and handler. The registry
advertises capabilities and rejects malformed invocations before dispatch.
"""

import copy
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, Optional

from salesforce_mcp.errors import InvalidArgumentError, UnknownOperationError

# JSON type name -> accepted Python types. bool is a subclass of int and is
# rejected separately for number and integer.
JSON_TYPES = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "object": (dict,),
    "boolean": (bool,),
    "array": (list, tuple),
}


@dataclass(frozen=True)
class OperationDescriptor:
    """
    One registered operation.

    Attributes:
        name: Unique operation name (also the MCP tool name)
        description: Human-readable description advertised to clients
        input_schema: JSON schema object for the arguments
        parse_request: Builds the typed request from normalized arguments
        handler: Coroutine ``handler(adapter, request)`` returning an OperationResult
    """

    name: str
    description: str
    input_schema: Dict[str, Any]
    parse_request: Callable[[Mapping[str, Any]], Any]
    handler: Callable[[Any, Any], Awaitable[Any]]

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    @property
    def properties(self) -> Dict[str, Dict[str, Any]]:
        return self.input_schema.get("properties", {})

    def to_tool(self) -> Dict[str, Any]:
        """MCP capability entry: ``{name, description, inputSchema}``."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


def _type_matches(value: Any, json_type: str) -> bool:
    if json_type in ("number", "integer") and isinstance(value, bool):
        return False
    if json_type == "integer" and isinstance(value, float):
        return value.is_integer()
    return isinstance(value, JSON_TYPES.get(json_type, (object,)))


class OperationRegistry:
    """Ordered, name-unique collection of OperationDescriptors."""

    def __init__(self, descriptors: Optional[List[OperationDescriptor]] = None):
        self._operations: Dict[str, OperationDescriptor] = {}
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: OperationDescriptor) -> None:
        if descriptor.name in self._operations:
            raise ValueError(f"Operation '{descriptor.name}' is already registered")
        self._operations[descriptor.name] = descriptor

    def list(self) -> List[OperationDescriptor]:
        """All descriptors in registration order."""
        return list(self._operations.values())

    def list_tools(self) -> List[Dict[str, Any]]:
        return [descriptor.to_tool() for descriptor in self._operations.values()]

    def get(self, name: str) -> OperationDescriptor:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def validate(self, name: str, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Check arguments against the operation's schema.

        Declared defaults are filled in for omitted parameters. Arguments the
        schema does not declare are passed through untouched.

        Args:
            name: Operation name
            arguments: Raw invocation arguments

        Returns:
            Normalized copy of the arguments

        Raises:
            UnknownOperationError: If no operation has this name
            InvalidArgumentError: Listing every schema violation found
        """
        descriptor = self.get(name)
        if not isinstance(arguments, Mapping):
            raise InvalidArgumentError(
                f"Invalid arguments for {name}: expected an object"
            )

        normalized = dict(arguments)
        problems = []

        for param in descriptor.required:
            if normalized.get(param) is None:
                problems.append(f"Missing required parameter: {param}")

        for param, schema in descriptor.properties.items():
            value = normalized.get(param)
            if value is None:
                if "default" in schema:
                    normalized[param] = schema["default"]
                else:
                    normalized.pop(param, None)
                continue

            json_type = schema.get("type")
            if json_type and not _type_matches(value, json_type):
                problems.append(f"Parameter '{param}' must be of type {json_type}")
                continue
            if json_type == "integer" and isinstance(value, float):
                normalized[param] = value = int(value)

            if "enum" in schema and value not in schema["enum"]:
                allowed = ", ".join(str(v) for v in schema["enum"])
                problems.append(f"Parameter '{param}' must be one of: {allowed}")
            if "minimum" in schema and value < schema["minimum"]:
                problems.append(
                    f"Parameter '{param}' must be at least {schema['minimum']}"
                )

        if problems:
            raise InvalidArgumentError(
                f"Invalid arguments for {name}: {'; '.join(problems)}",
                problems=problems,
            )
        return normalized

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[OperationDescriptor]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._operations)
