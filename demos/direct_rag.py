#!/usr/bin/env python3
"""
Case 1: direct RAG, search first and then generate

Prerequisites:
  1. Elasticsearch running on ELASTICSEARCH_URL
  2. Sample data loaded: python -m scripts.setup_elasticsearch
"""

import asyncio
import sys
from typing import Any, Dict, List

from mcp_server.core.clients import (create_chat_model,
                                     create_elasticsearch_handler)
from mcp_server.core.config import config
from mcp_server.core.elasticsearch_handler import ElasticsearchHandler

NO_RESULTS_ANSWER = "I couldn't find any products matching your query. Please try different keywords."


def build_context(products: List[Dict[str, Any]]) -> str:
    return "\n\n".join(
        f"{i}. {p.get('name')} (${p.get('price')})\n"
        f"   Category: {p.get('category')}\n"
        f"   Description: {p.get('description')}\n"
        f"   In Stock: {p.get('stock')} units"
        for i, p in enumerate(products, start=1)
    )


def build_prompt(user_query: str, context: str) -> str:
    return f"""You are a helpful shopping assistant. A customer asked: "{user_query}"

Here are the available products from our catalog:

{context}

Please provide a helpful, friendly response that:
1. Answers the customer's question
2. Recommends the most suitable products
3. Explains why each recommendation fits their needs
4. Mentions price and availability

Response:"""


async def find_products_for_user(handler: ElasticsearchHandler, model, user_query: str) -> str:
    print(f"\n🔍 User question: \"{user_query}\"\n")
    print("📦 Searching product catalog...")

    total, max_score, rows = await handler.search(
        index="products",
        query=user_query,
        size=5,
        fields=config.elasticsearch.product_fields
    )

    print("🔍 Elasticsearch Query Results:")
    print(f"   Total hits: {total}")
    print(f"   Max score: {max_score}")
    print("\n📋 Matching documents:")
    for i, row in enumerate(rows, start=1):
        print(f"   {i}. [Score: {(row.relevance or 0):.2f}] {row.fields.get('name')}")
        print(f"      ID: {row.id}")
        print(f"      Category: {row.fields.get('category')}")
        print(f"      Price: ${row.fields.get('price')}")
    print()

    products = [row.fields for row in rows]
    print(f"✅ Found {len(products)} products\n")

    if not products:
        return NO_RESULTS_ANSWER

    print("🤖 Generating AI response...\n")
    response = await model.ainvoke(build_prompt(user_query, build_context(products)))
    return response.content


async def main() -> int:
    handler = create_elasticsearch_handler(config)
    try:
        info = await handler.info()
        print(f"✅ Connected to Elasticsearch {info['version']}\n")

        model = create_chat_model(config)

        print("═" * 51)
        print("   Simple RAG Example - Product Catalog Assistant")
        print("═" * 51)

        answer = await find_products_for_user(handler, model, "I need a powerful laptop for work")
        print("💬 AI Assistant:")
        print("─" * 50)
        print(answer)
        print("═" * 50)
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    finally:
        await handler.close()

    print("\n✅ Demo complete!")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
