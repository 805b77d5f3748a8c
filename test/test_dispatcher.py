"""
JSON-RPC dispatcher: envelopes, method routing and error mapping
"""

from mcp.types import LATEST_PROTOCOL_VERSION

from mcp_server.core.dispatcher import JsonRpcDispatcher
from mcp_server.core.errors import (INTERNAL_ERROR, INVALID_PARAMS,
                                    INVALID_REQUEST, METHOD_NOT_FOUND)
from mcp_server.core.registry import ToolRegistry
from mcp_server.core.schemas import NoArguments
from mcp_server.tools.math_tools import build_math_registry
from mcp_server.tools.weather_tools import build_weather_registry


def math_dispatcher() -> JsonRpcDispatcher:
    return JsonRpcDispatcher(build_math_registry(), "math-server")


async def test_initialize_echoes_supported_version():
    dispatcher = math_dispatcher()
    response = await dispatcher.handle({
        "jsonrpc": "2.0", "id": 0, "method": "initialize",
        "params": {"protocolVersion": "2024-11-05", "capabilities": {},
                   "clientInfo": {"name": "test", "version": "0"}}
    })

    result = response["result"]
    assert response["id"] == 0
    assert result["protocolVersion"] == "2024-11-05"
    assert result["serverInfo"] == {"name": "math-server", "version": "1.0.0"}
    assert "tools" in result["capabilities"]


async def test_initialize_unknown_version_falls_back_to_latest():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 1, "method": "initialize",
        "params": {"protocolVersion": "1999-01-01"}
    })
    assert response["result"]["protocolVersion"] == LATEST_PROTOCOL_VERSION


async def test_tools_list_without_initialize():
    response = await math_dispatcher().handle(
        {"jsonrpc": "2.0", "id": 1, "method": "tools/list"})

    tools = response["result"]["tools"]
    names = [tool["name"] for tool in tools]
    assert names == ["add", "multiply"]
    assert len(set(names)) == len(names)
    assert all(tool["inputSchema"]["type"] == "object" for tool in tools)


async def test_tools_call_returns_text_content():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 2, "method": "tools/call",
        "params": {"name": "add", "arguments": {"a": 5, "b": 3}}
    })

    assert response == {
        "jsonrpc": "2.0",
        "id": 2,
        "result": {"content": [{"type": "text", "text": "8"}]},
    }


async def test_weather_tool():
    dispatcher = JsonRpcDispatcher(build_weather_registry(), "weather-server")
    response = await dispatcher.handle({
        "jsonrpc": "2.0", "id": "w1", "method": "tools/call",
        "params": {"name": "get_weather", "arguments": {"location": "NYC"}}
    })
    assert response["id"] == "w1"
    assert response["result"]["content"][0]["text"] == "It's always sunny in NYC"


async def test_unknown_tool_is_internal_error():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 3, "method": "tools/call",
        "params": {"name": "does_not_exist", "arguments": {}}
    })

    assert "result" not in response
    assert response["id"] == 3
    assert response["error"]["code"] == INTERNAL_ERROR
    assert response["error"]["message"] == "Unknown tool: does_not_exist"


async def test_unknown_method():
    response = await math_dispatcher().handle(
        {"jsonrpc": "2.0", "id": 4, "method": "resources/list"})
    assert response["error"]["code"] == METHOD_NOT_FOUND


async def test_invalid_arguments():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 5, "method": "tools/call",
        "params": {"name": "multiply", "arguments": {"a": 4}}
    })
    assert response["error"]["code"] == INVALID_PARAMS
    assert response["error"]["data"][0]["loc"] == ["b"]


async def test_tools_call_without_name():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 6, "method": "tools/call", "params": {}
    })
    assert response["error"]["code"] == INVALID_PARAMS


async def test_handler_exception_becomes_error_envelope():
    registry = ToolRegistry()

    @registry.tool("explode", "Always fails", NoArguments)
    async def explode(params):
        raise ConnectionError("backend unreachable")

    response = await JsonRpcDispatcher(registry, "test").handle({
        "jsonrpc": "2.0", "id": 7, "method": "tools/call",
        "params": {"name": "explode"}
    })
    assert response["error"] == {
        "code": INTERNAL_ERROR, "message": "backend unreachable"}


async def test_notification_gets_no_response():
    response = await math_dispatcher().handle(
        {"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert response is None


async def test_explicit_null_id_is_answered():
    response = await math_dispatcher().handle(
        {"jsonrpc": "2.0", "id": None, "method": "ping"})
    assert response == {"jsonrpc": "2.0", "id": None, "result": {}}


async def test_malformed_json():
    response = await math_dispatcher().handle_raw("{not json")
    assert response["id"] is None
    assert response["error"]["code"] == INTERNAL_ERROR
    assert response["error"]["message"].startswith("Parse error")


async def test_non_object_request():
    response = await math_dispatcher().handle([1, 2, 3])
    assert response["error"]["code"] == INVALID_REQUEST


async def test_missing_method():
    response = await math_dispatcher().handle({"jsonrpc": "2.0", "id": 9})
    assert response["id"] == 9
    assert response["error"]["code"] == INVALID_REQUEST


async def test_unsupported_id_type_is_dropped():
    response = await math_dispatcher().handle(
        {"jsonrpc": "2.0", "id": {"nested": True}, "method": "ping"})
    assert response["id"] is None
    assert response["error"]["code"] == INVALID_REQUEST


async def test_tools_list_is_stable_across_calls():
    dispatcher = math_dispatcher()
    request = {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}

    first = await dispatcher.handle(request)
    second = await dispatcher.handle(dict(request, id=2))

    assert first["result"] == second["result"]


async def test_null_arguments_mean_no_arguments():
    registry = ToolRegistry()

    @registry.tool("status", "Report status", NoArguments)
    def status(params):
        return "ok"

    response = await JsonRpcDispatcher(registry, "test").handle({
        "jsonrpc": "2.0", "id": 1, "method": "tools/call",
        "params": {"name": "status", "arguments": None}
    })
    assert response["result"]["content"][0]["text"] == "ok"


async def test_null_arguments_still_validated_against_tool():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 2, "method": "tools/call",
        "params": {"name": "add", "arguments": None}
    })
    assert response["error"]["code"] == INVALID_PARAMS
    assert "tool add" in response["error"]["message"]


async def test_bad_call_params_name_the_tool():
    response = await math_dispatcher().handle({
        "jsonrpc": "2.0", "id": 3, "method": "tools/call",
        "params": {"name": "add", "arguments": [1, 2]}
    })
    assert response["error"]["code"] == INVALID_PARAMS
    assert "tool add" in response["error"]["message"]
    assert "<missing>" not in response["error"]["message"]


async def test_boolean_id_is_rejected_not_coerced():
    response = await math_dispatcher().handle(
        {"jsonrpc": "2.0", "id": True, "method": "ping"})
    assert response["id"] is None
    assert response["error"]["code"] == INVALID_REQUEST
