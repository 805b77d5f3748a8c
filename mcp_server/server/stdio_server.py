"""
stdio transport: newline-delimited JSON-RPC on stdin/stdout

Messages are handled strictly one at a time, so responses leave in the
order requests arrived. stdout carries protocol traffic only; all logging
goes to stderr.
"""

import json
import sys
from io import TextIOWrapper

import anyio

from mcp_server.core.dispatcher import JsonRpcDispatcher
from mcp_server.tools.catalog import ToolServer
from utils.logger import logger


async def serve_stdio(dispatcher: JsonRpcDispatcher, stdin=None, stdout=None) -> int:
    """Read requests until EOF; returns the number of responses written."""
    if stdin is None:
        # bytes in, so an undecodable line reaches the dispatcher instead of killing the loop
        stdin = anyio.wrap_file(sys.stdin.buffer)
    if stdout is None:
        stdout = anyio.wrap_file(TextIOWrapper(sys.stdout.buffer, encoding="utf-8"))

    written = 0
    async for line in stdin:
        if not line.strip():
            continue
        response = await dispatcher.handle_raw(line)
        if response is None:
            continue
        await stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
        await stdout.flush()
        written += 1
    return written


async def run_stdio_server(tool_server: ToolServer) -> None:
    await tool_server.check_backend()
    logger.info(f"{tool_server.name} MCP server running on stdio")
    logger.info(f"Available tools: {', '.join(tool_server.registry.names)}")
    try:
        await serve_stdio(tool_server.dispatcher())
    finally:
        await tool_server.aclose()
        logger.info(f"{tool_server.name} stdin closed, shutting down")
