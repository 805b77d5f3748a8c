#!/usr/bin/env python3
"""
Raw JSON-RPC client for the stdio MCP servers

Spawns the math server as a child process and talks newline-delimited
JSON over its stdin/stdout; the server's stderr (logs) is inherited.
"""

import asyncio
import json
import sys
from typing import Any, Dict, List

SERVER_CMD = [sys.executable, "-m", "mcp_server.server.mcp_server",
              "--server", "math", "--transport", "stdio"]

REQUESTS: List[Dict[str, Any]] = [
    {"jsonrpc": "2.0", "id": 1, "method": "tools/list"},
    {"jsonrpc": "2.0", "id": 2, "method": "tools/call",
     "params": {"name": "add", "arguments": {"a": 5, "b": 3}}},
    {"jsonrpc": "2.0", "id": 3, "method": "tools/call",
     "params": {"name": "multiply", "arguments": {"a": 4, "b": 7}}},
    {"jsonrpc": "2.0", "id": 4, "method": "tools/call",
     "params": {"name": "does_not_exist", "arguments": {}}},
]


async def exchange(process: asyncio.subprocess.Process, request: Dict[str, Any], timeout: float = 10.0) -> Dict[str, Any]:
    process.stdin.write((json.dumps(request) + "\n").encode())
    await process.stdin.drain()
    line = await asyncio.wait_for(process.stdout.readline(), timeout=timeout)
    if not line:
        raise RuntimeError("Server closed stdout before answering")
    return json.loads(line.decode())


async def main() -> int:
    print("🚀 Starting math MCP server over stdio...")
    process = await asyncio.create_subprocess_exec(
        *SERVER_CMD,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE
    )

    try:
        for request in REQUESTS:
            label = request["method"]
            if request["method"] == "tools/call":
                label += f" {request['params']['name']}"
            print(f"\n📤 Sending {label}...")
            response = await exchange(process, request)
            print(f"📨 Server response: {json.dumps(response)}")
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    finally:
        process.stdin.close()
        await process.wait()

    print("\n✅ Done")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
