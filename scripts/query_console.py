#!/usr/bin/env python3
"""Interactive ChromaDB query console.

Usage:
  python -m scripts.query_console

Commands: list, peek <collection> [n], query <collection> <text> [n], help, exit
"""
import asyncio
import json
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from mcp_server.core.chroma_handler import ChromaHandler
from mcp_server.core.clients import create_chroma_handler
from mcp_server.core.config import config

RULE = "─" * 50

HELP = """
📖 Available Commands:
──────────────────────────────────────────────────
   list                    - List all collections
   peek <collection>       - Show first 5 documents
   peek <collection> <n>   - Show first N documents
   query <collection> <text> - Search collection
   query <collection> <text> <n> - Search with N results
   help                    - Show this help
   exit                    - Exit console
──────────────────────────────────────────────────

Examples:
   > list
   > peek products
   > peek products 10
   > query products laptop
   > query products wireless mouse 3
"""


@dataclass
class Command:
    name: str
    collection: Optional[str] = None
    text: Optional[str] = None
    limit: int = 5
    error: Optional[str] = None
    args: List[str] = field(default_factory=list)


def parse_command(line: str) -> Command:
    """Turn one console line into a Command; usage problems land in .error"""
    parts = line.split()
    if not parts:
        return Command(name="")
    name = parts[0].lower()

    if name == "peek":
        if len(parts) < 2:
            return Command(name, error="Usage: peek <collection> [limit]")
        limit = int(parts[2]) if len(parts) > 2 and parts[2].isdigit() else 5
        return Command(name, collection=parts[1], limit=limit)

    if name == "query":
        if len(parts) < 3:
            return Command(name, error="Usage: query <collection> <search text> [n_results]")
        text_parts = parts[2:]
        limit = 5
        # a trailing number is the result count, unless it is the only search word
        if len(parts) > 3 and parts[-1].isdigit():
            limit = int(parts[-1])
            text_parts = parts[2:-1]
        return Command(name, collection=parts[1], text=" ".join(text_parts), limit=limit)

    if name == "quit":
        name = "exit"
    return Command(name, args=parts[1:])


def indent_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False).replace("\n", "\n      ")


async def list_collections(handler: ChromaHandler) -> None:
    print("\n📚 Available Collections:")
    print(RULE)
    names = await handler.list_collections()
    if not names:
        print("   No collections found")
    for name in names:
        info = await handler.get_collection_info(name)
        print(f"   📦 {name} ({info['count']} documents)")
        if info["metadata"]:
            print(f"      Metadata: {json.dumps(info['metadata'])}")
    print(RULE)


async def peek_collection(handler: ChromaHandler, collection: str, limit: int) -> None:
    print(f"\n👀 Peeking at \"{collection}\" (limit: {limit})")
    print(RULE)
    items = await handler.peek(collection, limit=limit)
    if not items:
        print("   Collection is empty")
        return
    print(f"   Showing {len(items)} documents:\n")
    for i, item in enumerate(items, start=1):
        print(f"   {i}. ID: {item['id']}")
        if item["metadata"]:
            print(f"      Metadata: {indent_json(item['metadata'])}")
        print(f"      Document: {item['document']}\n")
    print(RULE)


async def query_collection(handler: ChromaHandler, collection: str, text: str, limit: int) -> None:
    print(f"\n🔍 Searching \"{collection}\" for: \"{text}\"")
    print(RULE)
    rows = await handler.query_collection(text, collection=collection, n_results=limit)
    if not rows:
        print("   No results found")
        return
    print(f"   Found {len(rows)} results:\n")
    for i, row in enumerate(rows, start=1):
        print(f"   {i}. ID: {row.id}")
        if row.relevance is not None:
            print(f"      Distance: {row.relevance:.4f} (lower is better)")
        if row.fields:
            print(f"      Metadata: {indent_json(row.fields)}")
        print(f"      Document: {row.document}\n")
    print(RULE)


async def execute(handler: ChromaHandler, command: Command) -> bool:
    """Run one command; returns False when the console should exit."""
    if command.error:
        print(f"❌ {command.error}")
        return True

    try:
        if command.name == "list":
            await list_collections(handler)
        elif command.name == "peek":
            await peek_collection(handler, command.collection, command.limit)
        elif command.name == "query":
            await query_collection(handler, command.collection, command.text, command.limit)
        elif command.name == "help":
            print(HELP)
        elif command.name == "exit":
            print("\n👋 Goodbye!\n")
            return False
        elif command.name:
            print(f"❌ Unknown command: {command.name}")
            print("   Type \"help\" for available commands")
    except Exception as e:
        print(f"   ❌ Error: {e}")
    return True


async def main() -> int:
    handler = create_chroma_handler(config)
    print("╔════════════════════════════════════════════════════╗")
    print("║       ChromaDB Interactive Query Console           ║")
    print("╚════════════════════════════════════════════════════╝")
    print(f"\n📍 Connecting to: {config.chroma.url}\n")

    try:
        print(f"✅ ChromaDB version: {await handler.version()}")
    except Exception as e:
        print(f"❌ Failed to connect to ChromaDB: {e}", file=sys.stderr)
        print(f"   Make sure ChromaDB is running on {config.chroma.url}", file=sys.stderr)
        return 1

    print(HELP)
    while True:
        try:
            line = await asyncio.to_thread(input, "chroma> ")
        except EOFError:
            break
        if not await execute(handler, parse_command(line)):
            break
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
