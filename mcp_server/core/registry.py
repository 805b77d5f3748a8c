"""
Tool registry: a static mapping from tool name to description, input model and handler
"""

import inspect
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Type, Union

from mcp.types import Tool
from pydantic import BaseModel, ValidationError

from mcp_server.core.errors import ToolInputError, UnknownTool

ToolResult = Union[str, Dict[str, Any], List[Any]]
ToolHandler = Callable[[BaseModel],
                       Union[ToolResult, Awaitable[ToolResult]]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: ToolHandler

    def descriptor(self) -> Tool:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return Tool(name=self.name, description=self.description, inputSchema=schema)


def to_text(result: ToolResult) -> str:
    """Serialize a handler result into the text payload of a tools/call response."""
    if isinstance(result, str):
        return result
    return json.dumps(result, ensure_ascii=False, indent=2, default=str)


class ToolRegistry:
    """Ordered tool registrations for one server.

    Registrations happen while the server is built; after that the registry
    is only read.
    """

    def __init__(self):
        self._tools: Dict[str, ToolSpec] = {}

    def register(self, name: str, description: str, input_model: Type[BaseModel], handler: ToolHandler) -> ToolSpec:
        if name in self._tools:
            raise ValueError(f"Tool already registered: {name}")
        spec = ToolSpec(name=name, description=description,
                        input_model=input_model, handler=handler)
        self._tools[name] = spec
        return spec

    def tool(self, name: str, description: str, input_model: Type[BaseModel]):
        """Decorator form of register()."""
        def decorator(handler: ToolHandler) -> ToolHandler:
            self.register(name, description, input_model, handler)
            return handler
        return decorator

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownTool(name) from None

    def describe(self) -> List[Tool]:
        return [spec.descriptor() for spec in self._tools.values()]

    def validate(self, name: str, arguments: Dict[str, Any] | None) -> BaseModel:
        spec = self.get(name)
        try:
            return spec.input_model.model_validate(arguments or {})
        except ValidationError as e:
            raise ToolInputError(name, e.errors()) from e

    async def invoke(self, name: str, arguments: Dict[str, Any] | None) -> str:
        """Validate arguments, run the named handler and return its text payload."""
        spec = self.get(name)
        params = self.validate(name, arguments)
        result = spec.handler(params)
        if inspect.isawaitable(result):
            result = await result
        return to_text(result)
