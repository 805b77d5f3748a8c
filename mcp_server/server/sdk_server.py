"""
MCP SDK bridge: serve a tool registry through mcp.server.lowlevel.Server

Unlike the hand-rolled dispatcher, the SDK enforces the initialize
handshake and reports tool failures as CallToolResult(isError=True).
"""

from contextlib import asynccontextmanager
from typing import List

import mcp.types as types
from fastapi import FastAPI
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from mcp_server.server.http_server import add_cors, health
from mcp_server.tools.catalog import ToolServer
from utils.logger import logger


def build_sdk_server(tool_server: ToolServer) -> Server:
    server = Server(tool_server.name, version=tool_server.version)
    registry = tool_server.registry

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return registry.describe()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict) -> List[types.TextContent]:
        logger.info(f"Handling tool call: {name} with arguments: {arguments}")
        text = await registry.invoke(name, arguments)
        logger.info(f"Tool {name} completed successfully")
        return [types.TextContent(type="text", text=text)]

    return server


async def run_sdk_stdio_server(tool_server: ToolServer) -> None:
    server = build_sdk_server(tool_server)
    await tool_server.check_backend()
    logger.info(f"{tool_server.name} MCP SDK server running on stdio")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        await tool_server.aclose()


class StreamableHTTPEndpoint:
    """ASGI endpoint handing each request to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send):
        await self.session_manager.handle_request(scope, receive, send)


def create_sdk_app(tool_server: ToolServer) -> FastAPI:
    """Stateless streamable HTTP: a fresh transport per request, no session ids."""
    server = build_sdk_server(tool_server)
    session_manager = StreamableHTTPSessionManager(
        app=server,
        json_response=True,
        stateless=True
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await tool_server.check_backend()
        async with session_manager.run():
            yield
        await tool_server.aclose()

    app = FastAPI(
        title=f"{tool_server.name} MCP HTTP Server (SDK transport)",
        version=tool_server.version,
        lifespan=lifespan
    )
    app.state.tool_server = tool_server

    add_cors(app)
    app.add_route("/mcp", StreamableHTTPEndpoint(session_manager),
                  methods=["GET", "POST", "DELETE"])
    app.add_api_route("/health", health, methods=["GET"])
    return app
