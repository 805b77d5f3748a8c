"""
Error types raised inside the MCP servers and the JSON-RPC codes they map to
"""

from mcp.types import (INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST,
                       METHOD_NOT_FOUND, PARSE_ERROR)

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "McpServerError",
    "InvalidRequest",
    "UnknownMethod",
    "UnknownTool",
    "ToolInputError",
]


class McpServerError(Exception):
    """Base class for errors that become JSON-RPC error envelopes."""

    code = INTERNAL_ERROR

    def __init__(self, message: str, data=None):
        super().__init__(message)
        self.message = message
        self.data = data


class InvalidRequest(McpServerError):
    code = INVALID_REQUEST


class UnknownMethod(McpServerError):
    code = METHOD_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"Method not found: {method}")
        self.method = method


class UnknownTool(McpServerError):
    """Raised when tools/call names a tool the registry does not hold."""

    code = INTERNAL_ERROR

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolInputError(McpServerError):
    """Raised when tool arguments fail validation against the tool's input model."""

    code = INVALID_PARAMS

    def __init__(self, name: str, errors):
        summary = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())) or 'arguments'}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid arguments for tool {name}: {summary}",
                         data=[{"loc": list(err.get("loc", ())), "msg": err.get("msg")}
                               for err in errors])
        self.name = name
