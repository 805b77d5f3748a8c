"""
JSON-RPC 2.0 dispatcher shared by the stdio and HTTP transports

Each request is independent: it is parsed, routed through a method table,
and turned into exactly one response envelope (or none for notifications).
Every failure is converted into an error envelope here; nothing escapes to
the transport.
"""

import json
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from mcp.shared.version import SUPPORTED_PROTOCOL_VERSIONS
from mcp.types import LATEST_PROTOCOL_VERSION
from pydantic import ValidationError

from mcp_server.core.errors import (INTERNAL_ERROR, InvalidRequest,
                                    McpServerError, ToolInputError,
                                    UnknownMethod, UnknownTool)
from mcp_server.core.registry import ToolRegistry
from mcp_server.core.schemas import (CallToolParams, JsonRpcRequest,
                                     JsonRpcResponse)
from utils.logger import logger as default_logger

MethodHandler = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


class JsonRpcDispatcher:
    """Route JSON-RPC envelopes to a tool registry."""

    def __init__(self, registry: ToolRegistry, name: str, version: str = "1.0.0", logger=None):
        self.registry = registry
        self.name = name
        self.version = version
        self.logger = (logger or default_logger).bind(server=name)
        self.methods: Dict[str, MethodHandler] = {
            "initialize": self.initialize,
            "ping": self.ping,
            "tools/list": self.list_tools,
            "tools/call": self.call_tool,
        }

    async def initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        requested = params.get("protocolVersion")
        version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self.name, "version": self.version},
        }

    async def ping(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {}

    async def list_tools(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "tools": [tool.model_dump(exclude_none=True)
                      for tool in self.registry.describe()]
        }

    async def call_tool(self, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            call = CallToolParams.model_validate(params)
        except ValidationError as e:
            name = params.get("name")
            raise ToolInputError(name if isinstance(name, str) else "<missing>", e.errors()) from e

        self.logger.info(
            f"Handling tool call: {call.name} with arguments: {call.arguments or {}}")
        text = await self.registry.invoke(call.name, call.arguments)
        return {"content": [{"type": "text", "text": text}]}

    async def handle_raw(self, raw: str | bytes) -> Optional[Dict[str, Any]]:
        """Parse one serialized message and dispatch it."""
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            message = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.error(f"Malformed JSON-RPC message: {e}")
            return JsonRpcResponse.failure(None, INTERNAL_ERROR, f"Parse error: {e}").to_dict()
        return await self.handle(message)

    async def handle(self, message: Any) -> Optional[Dict[str, Any]]:
        """Dispatch one decoded message; returns None for notifications."""
        request_id = message.get("id") if isinstance(message, dict) else None
        if isinstance(request_id, bool) or not isinstance(request_id, (str, int)):
            request_id = None
        started = time.perf_counter()

        try:
            request = self._parse(message)
        except InvalidRequest as e:
            self.logger.error(f"Invalid JSON-RPC request: {e.message}")
            return JsonRpcResponse.failure(request_id, e.code, e.message).to_dict()

        tool_name = (request.params or {}).get(
            "name") if request.method == "tools/call" else None
        self.logger.debug(
            f"-> {request.method} id={request.id!r}" + (f" tool={tool_name}" if tool_name else ""))

        if request.is_notification:
            # notifications/initialized and friends: acknowledged, never answered
            self.logger.debug(f"Notification received: {request.method}")
            return None

        try:
            handler = self.methods.get(request.method)
            if handler is None:
                raise UnknownMethod(request.method)
            result = await handler(request.params or {})
            response = JsonRpcResponse.success(request.id, result)
        except UnknownTool as e:
            self.logger.error(f"Unknown tool requested: {e.name}")
            response = JsonRpcResponse.failure(request.id, e.code, e.message)
        except McpServerError as e:
            self.logger.error(f"{request.method} failed: {e.message}")
            response = JsonRpcResponse.failure(
                request.id, e.code, e.message, e.data)
        except Exception as e:
            self.logger.exception(
                f"Error handling {request.method}" + (f" tool {tool_name}" if tool_name else "") + f": {e}")
            response = JsonRpcResponse.failure(
                request.id, INTERNAL_ERROR, str(e) or e.__class__.__name__)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        outcome = "error" if response.error else "ok"
        self.logger.info(
            f"<- {request.method} id={request.id!r} {outcome} in {elapsed_ms}ms"
            + (f" tool={tool_name}" if tool_name else ""))
        return response.to_dict()

    @staticmethod
    def _parse(message: Any) -> JsonRpcRequest:
        if not isinstance(message, dict):
            raise InvalidRequest("Invalid request: expected a JSON object")
        try:
            return JsonRpcRequest.model_validate(message)
        except ValidationError as e:
            raise InvalidRequest(
                f"Invalid request: {e.errors()[0].get('msg', 'malformed envelope')}") from e
