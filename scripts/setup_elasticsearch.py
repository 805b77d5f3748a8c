#!/usr/bin/env python3
"""Load the sample products and customers into Elasticsearch.

Usage:
  python -m scripts.setup_elasticsearch

Documents are indexed with their explicit ids, so running the script twice
overwrites rather than duplicates them.
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from mcp_server.core.clients import create_elasticsearch_handler
from mcp_server.core.config import config
from mcp_server.core.elasticsearch_handler import ElasticsearchHandler

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def load_json(name: str) -> List[Dict[str, Any]]:
    with open(DATA_DIR / name, "r", encoding="utf-8") as f:
        return json.load(f)


async def index_all(handler: ElasticsearchHandler, index: str, documents: List[Dict[str, Any]]) -> int:
    for document in documents:
        await handler.index_document(index=index, document=document, id=str(document["id"]))
    await handler.refresh(index)
    return len(documents)


async def main() -> int:
    handler = create_elasticsearch_handler(config)
    try:
        print("🔌 Connecting to Elasticsearch...")
        info = await handler.info()
        print(f"✅ Connected to Elasticsearch {info['version']}\n")

        print("📦 Creating products index...")
        count = await index_all(handler, "products", load_json("products.json"))
        print(f"✅ Indexed {count} products\n")

        print("👥 Creating customers index...")
        count = await index_all(handler, "customers", load_json("customers.json"))
        print(f"✅ Indexed {count} customers\n")

        print("📋 Available indices:")
        for index in await handler.get_indices():
            print(f"  - {index['name']} ({index['docsCount']} documents)")

        print("\n✅ Sample data setup complete!")
        return 0
    except Exception as e:
        print(f"❌ Error setting up data: {e}", file=sys.stderr)
        return 1
    finally:
        await handler.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
