#!/usr/bin/env python3
"""Load the sample products into a fresh ChromaDB "products" collection.

Usage:
  python -m scripts.setup_chroma

The embedding function is chosen by CHROMA_EMBEDDING_FUNCTION (default: the
built-in MiniLM-L6-v2 model).
"""
import asyncio
import sys
from typing import Any, Dict, List

from mcp_server.core.clients import create_chroma_handler
from mcp_server.core.config import config
from scripts.setup_elasticsearch import load_json

COLLECTION = "products"


def to_document(product: Dict[str, Any]) -> str:
    text = (f"{product['name']}. {product['description']}. "
            f"Category: {product['category']}. Price: ${product['price']}")
    if product.get("stock"):
        text += f". Stock: {product['stock']}"
    return text


def to_metadata(product: Dict[str, Any]) -> Dict[str, Any]:
    metadata = {
        "name": product["name"],
        "category": product["category"],
        "price": product["price"],
        "description": product["description"],
    }
    if product.get("stock"):
        metadata["stock"] = product["stock"]
    return metadata


async def main() -> int:
    products: List[Dict[str, Any]] = load_json("products.json")
    handler = create_chroma_handler(config)
    try:
        print("🔌 Connecting to ChromaDB...")
        print(f"   Trying to connect to: {config.chroma.url}")
        client = await handler.get_client()
        print(f"✅ Connected to ChromaDB {await handler.version()}")

        if COLLECTION in await handler.list_collections():
            await client.delete_collection(name=COLLECTION)
            print(f"🗑️  Deleted existing \"{COLLECTION}\" collection")

        print(f"📦 Creating \"{COLLECTION}\" collection...")
        print(f"🔧 Embedding function: {config.chroma.embedding_function}")
        collection = await client.create_collection(
            name=COLLECTION,
            embedding_function=handler.embedding_function,
            metadata={"description": "Product catalog for e-commerce"}
        )

        print(f"📝 Adding {len(products)} products to collection...")
        await collection.add(
            ids=[str(p["id"]) for p in products],
            documents=[to_document(p) for p in products],
            metadatas=[to_metadata(p) for p in products]
        )

        print("✅ Data initialization complete!")
        print("\n📊 Summary:")
        print(f"   Collection: {COLLECTION}")
        print(f"   Documents: {len(products)}")
        print("\n🔍 Sample products:")
        for p in products[:3]:
            print(f"   - {p['name']} (${p['price']}) - {p['category']}")

        print("\n🧪 Testing query: \"laptop\"...")
        rows = await handler.query_collection("laptop", collection=COLLECTION, n_results=2)
        print(f"   Found {len(rows)} results")

        print("\n✨ ChromaDB is ready for queries!")
        return 0
    except Exception as e:
        print(f"❌ Error setting up ChromaDB: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
