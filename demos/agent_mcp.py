#!/usr/bin/env python3
"""
Cases 3 and 4: agent with tools discovered from an MCP server

    python -m demos.agent_mcp                          # elasticsearch over HTTP (port 8001)
    python -m demos.agent_mcp --transport stdio        # spawns the elasticsearch server itself
    python -m demos.agent_mcp --backend chroma         # chroma over HTTP (port 8002), streamed

Prerequisites:
  1. Elasticsearch or ChromaDB running, with sample data loaded
  2. For --transport http, the MCP server started:
     python -m mcp_server.server.mcp_server --server elasticsearch --transport http
"""

import argparse
import asyncio
import os
import sys
from typing import Any, Dict

from langchain_core.messages import AIMessageChunk
from langchain_mcp_adapters.client import MultiServerMCPClient
from langgraph.prebuilt import create_react_agent

from mcp_server.core.clients import create_chat_model
from mcp_server.core.config import config
from mcp_server.tools.catalog import DEFAULT_PORTS

SYSTEM_PROMPTS = {
    "elasticsearch": """You are a helpful and friendly shopping assistant for an electronics store.

When helping customers:
1. Search for products that match their needs
2. Recommend the best options and explain why
3. Always mention price and availability
4. Be conversational and helpful

Use the search tools to find products in our catalog.""",
    "chroma": """You are a helpful and friendly shopping assistant for an electronics store.

When helping customers:
1. Search for products that match their needs using semantic search
2. Recommend the best options and explain why
3. Always mention price and availability
4. Be conversational and helpful

Use the Chroma search tools to find products in our catalog.""",
}

QUESTIONS = {
    "elasticsearch": "I need a laptop for programming",
    "chroma": "I need a good laptop for programming and development work. What do you recommend?",
}


def connection_for(backend: str, transport: str, url: str | None = None) -> Dict[str, Any]:
    """Describe how MultiServerMCPClient reaches the server."""
    if transport == "stdio":
        return {
            "transport": "stdio",
            "command": sys.executable,
            "args": ["-m", "mcp_server.server.mcp_server", "--server", backend, "--transport", "stdio"],
            # the child only sees what we pass, so forward backend URLs and keys
            "env": dict(os.environ),
        }
    return {
        "transport": "streamable_http",
        "url": url or f"http://localhost:{DEFAULT_PORTS[backend]}/mcp",
    }


async def stream_answer(agent, question: str) -> str:
    answer = []
    async for message, _metadata in agent.astream(
            {"messages": [{"role": "user", "content": question}]},
            stream_mode="messages"):
        if isinstance(message, AIMessageChunk) and isinstance(message.content, str) and message.content:
            print(message.content, end="", flush=True)
            answer.append(message.content)
    print()
    return "".join(answer)


async def run(backend: str, transport: str, url: str | None = None) -> None:
    connection = connection_for(backend, transport, url)
    title = "Chroma" if backend == "chroma" else transport.upper()
    print("═" * 51)
    print(f"   Agent with MCP ({title}) - Product Assistant")
    print("═" * 51 + "\n")

    where = connection.get("url") or "a child process over stdio"
    print(f"🔌 Connecting to {backend} MCP server at {where}...")
    client = MultiServerMCPClient({backend: connection})
    tools = await client.get_tools()

    print(f"✅ Loaded {len(tools)} tools from MCP:\n")
    for tool in tools:
        print(f"   - {tool.name}: {tool.description}")
    print()

    agent = create_react_agent(
        create_chat_model(config),
        tools=tools,
        prompt=SYSTEM_PROMPTS[backend]
    )

    question = QUESTIONS[backend]
    print(f"💬 Customer: \"{question}\"\n")

    if backend == "chroma":
        print("🤔 Agent thinking...\n")
        await stream_answer(agent, question)
    else:
        response = await agent.ainvoke({"messages": [{"role": "user", "content": question}]})
        print("🤖 Assistant:")
        print("─" * 50)
        print(response["messages"][-1].content)
    print("═" * 50)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Agent with MCP-discovered tools")
    parser.add_argument("--backend", choices=["elasticsearch", "chroma"], default="elasticsearch")
    parser.add_argument("--transport", choices=["http", "stdio"], default="http")
    parser.add_argument("--url", default=None, help="MCP endpoint for --transport http")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        asyncio.run(run(args.backend, args.transport, args.url))
    except Exception as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        print("\n💡 Make sure to:", file=sys.stderr)
        if args.backend == "chroma":
            print("   1. Start ChromaDB and load data: python -m scripts.setup_chroma", file=sys.stderr)
        else:
            print("   1. Start Elasticsearch and load data: python -m scripts.setup_elasticsearch", file=sys.stderr)
        if args.transport == "http":
            print(f"   2. Start the MCP server: python -m mcp_server.server.mcp_server "
                  f"--server {args.backend} --transport http", file=sys.stderr)
        print("   3. Check that .env has GOOGLE_API_KEY set", file=sys.stderr)
        return 1

    print("\n✅ Demo complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
