"""
ChromaDB tools: semantic query, list collections, collection info
"""

from mcp_server.core.chroma_handler import ChromaHandler
from mcp_server.core.registry import ToolRegistry
from mcp_server.core.schemas import (ChromaCollectionRequest,
                                     ChromaQueryRequest, NoArguments)


def build_chroma_registry(handler: ChromaHandler) -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool("chroma_query_collection",
                   "Search documents in a ChromaDB collection using semantic similarity",
                   ChromaQueryRequest)
    async def query_collection(params: ChromaQueryRequest) -> list:
        rows = await handler.query_collection(
            query=params.query,
            collection=params.collection,
            n_results=params.n_results
        )
        return [row.to_dict() for row in rows]

    @registry.tool("chroma_list_collections",
                   "List all collections in ChromaDB",
                   NoArguments)
    async def list_collections(params: NoArguments) -> list:
        return await handler.list_collections()

    @registry.tool("chroma_get_collection_info",
                   "Get information about a collection",
                   ChromaCollectionRequest)
    async def get_collection_info(params: ChromaCollectionRequest) -> dict:
        return await handler.get_collection_info(params.collection)

    return registry
