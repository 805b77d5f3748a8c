#!/usr/bin/env python3
"""
Raw JSON-RPC client for the HTTP MCP servers, no MCP library involved

    python -m mcp_server.server.mcp_server --server weather --transport http
    python -m demos.mcp_http_client
"""

import asyncio
import json
import sys
from itertools import count
from typing import Any, Dict, List, Optional

import httpx

SERVER_URL = "http://localhost:8000/mcp"


class JsonRpcHttpClient:
    """Minimal JSON-RPC 2.0 client for POST /mcp"""

    def __init__(self, url: str = SERVER_URL, timeout: float = 30.0, verbose: bool = True, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.timeout = timeout
        self.verbose = verbose
        self.transport = transport
        self._ids = count(1)

    async def send(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        request = {"jsonrpc": "2.0", "id": next(self._ids), "method": method}
        if params is not None:
            request["params"] = params
        if self.verbose:
            print(f"\n→ Sending request: {json.dumps(request, indent=2)}")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.url,
                json=request,
                headers={"Accept": "application/json, text/event-stream"}
            )

        if response.status_code != 200:
            raise Exception(f"HTTP error! status: {response.status_code}")

        data = response.json()
        if self.verbose:
            print(f"← Response: {json.dumps(data, indent=2)}")
        return data

    async def list_tools(self) -> List[Dict[str, Any]]:
        data = await self.send("tools/list")
        return data.get("result", {}).get("tools", [])

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return await self.send("tools/call", {"name": name, "arguments": arguments})


def print_text_content(response: Dict[str, Any]) -> None:
    for item in response.get("result", {}).get("content", []):
        if item.get("type") == "text":
            print(f"   {item['text']}")


async def run_checks(url: str = SERVER_URL) -> int:
    client = JsonRpcHttpClient(url)
    print("🧪 Testing MCP HTTP Server...\n")
    print(f"Server URL: {url}")

    print("\n📋 Test 1: List Tools")
    tools = await client.list_tools()
    print(f"✅ Found {len(tools)} tool(s):")
    for tool in tools:
        print(f"   - {tool['name']}: {tool.get('description', '')}")

    print("\n🌤️  Test 2: Call get_weather tool")
    response = await client.call_tool("get_weather", {"location": "San Francisco"})
    print("✅ Weather result:")
    print_text_content(response)

    print("\n🌍 Test 3: Call get_weather with different location")
    response = await client.call_tool("get_weather", {"location": "Tokyo"})
    print("✅ Weather result:")
    print_text_content(response)

    print("\n❌ Test 4: Test error handling (unknown tool)")
    response = await client.call_tool("unknown_tool", {})
    if "error" in response:
        print(f"✅ Error handled correctly: {response['error']['message']}")
    else:
        print("⚠️  Expected an error envelope for an unknown tool")
        return 1

    print("\n✅ All tests completed!")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(run_checks(sys.argv[1] if len(sys.argv) > 1 else SERVER_URL)))
    except Exception as e:
        print(f"❌ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
