#!/usr/bin/env python3
"""
Case 2: agent-based RAG, the model decides when to call a local search tool

Prerequisites:
  1. Elasticsearch running on ELASTICSEARCH_URL
  2. Sample data loaded: python -m scripts.setup_elasticsearch
"""

import asyncio
import json
import sys

from langchain_core.tools import StructuredTool
from langgraph.prebuilt import create_react_agent
from pydantic import BaseModel, Field

from mcp_server.core.clients import (create_chat_model,
                                     create_elasticsearch_handler)
from mcp_server.core.config import config
from mcp_server.core.elasticsearch_handler import ElasticsearchHandler

SYSTEM_PROMPT = """You are a helpful and friendly shopping assistant for an electronics store.

Your goal is to help customers find the right products for their needs.

When a customer asks about products:
1. Use the search_products tool to find relevant items in our catalog
2. Recommend products that best match their needs
3. Explain why each product is a good fit
4. Always mention the price and availability (stock)
5. Be honest if we don't have exactly what they're looking for

Be conversational and helpful. Ask clarifying questions if needed."""


class SearchProductsInput(BaseModel):
    query: str = Field(
        description="The search query - can be product name, category, or keywords from description")
    max_results: int = Field(
        default=5, description="Maximum number of results to return (default: 5)")


def build_search_tool(handler: ElasticsearchHandler) -> StructuredTool:
    async def search_products(query: str, max_results: int = 5) -> str:
        print(f"  🔍 Searching for: \"{query}\"")
        try:
            total, max_score, rows = await handler.search(
                index="products",
                query=query,
                size=max_results,
                fields=config.elasticsearch.product_fields
            )
        except Exception as e:
            return f"Error searching products: {e}"

        print(f"  📥 Total hits: {total}, max score: {max_score}")
        for i, row in enumerate(rows, start=1):
            print(
                f"     {i}. [Score: {(row.relevance or 0):.2f}] {row.fields.get('name')} (${row.fields.get('price')})")

        if not rows:
            return "No products found matching that query."

        products = [
            {key: row.fields.get(key)
             for key in ("name", "category", "price", "description", "stock")}
            for row in rows
        ]
        print(f"  ✅ Found {len(products)} products\n")
        return json.dumps(products, ensure_ascii=False, indent=2)

    return StructuredTool.from_function(
        coroutine=search_products,
        name="search_products",
        description=("Search for products in our catalog. Use this when customers ask about products, "
                     "prices, or availability. You can search by product name, category, or description."),
        args_schema=SearchProductsInput
    )


async def main() -> int:
    handler = create_elasticsearch_handler(config)
    try:
        info = await handler.info()
        print(f"✅ Connected to Elasticsearch {info['version']}\n")

        print("═" * 51)
        print("   Agent-Based RAG - Product Catalog Assistant")
        print("═" * 51 + "\n")

        agent = create_react_agent(
            create_chat_model(config),
            tools=[build_search_tool(handler)],
            prompt=SYSTEM_PROMPT
        )

        question = "I need a powerful laptop for work"
        print(f"💬 Customer: \"{question}\"\n")
        response = await agent.ainvoke({"messages": [{"role": "user", "content": question}]})

        print("🤖 Assistant:")
        print("─" * 50)
        print(response["messages"][-1].content)
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
