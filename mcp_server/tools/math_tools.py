"""
Math tools: the smallest possible MCP server, used by the stdio client demo
"""

from mcp_server.core.registry import ToolRegistry
from mcp_server.core.schemas import BinaryOperands


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def build_math_registry() -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool("add", "Add two numbers", BinaryOperands)
    def add(params: BinaryOperands) -> str:
        return format_number(params.a + params.b)

    @registry.tool("multiply", "Multiply two numbers", BinaryOperands)
    def multiply(params: BinaryOperands) -> str:
        return format_number(params.a * params.b)

    return registry
