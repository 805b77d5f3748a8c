"""
Elasticsearch tools: search, index a document, list indices
"""

from mcp_server.core.elasticsearch_handler import ElasticsearchHandler
from mcp_server.core.registry import ToolRegistry
from mcp_server.core.schemas import (ElasticsearchIndexRequest,
                                     ElasticsearchSearchRequest, NoArguments)


def build_elasticsearch_registry(handler: ElasticsearchHandler) -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool("elasticsearch_search",
                   "Search documents in Elasticsearch index",
                   ElasticsearchSearchRequest)
    async def search(params: ElasticsearchSearchRequest) -> dict:
        total, max_score, rows = await handler.search(
            index=params.index,
            query=params.query,
            size=params.size
        )
        return {
            "total": total,
            "max_score": max_score,
            "hits": [row.to_dict() for row in rows],
        }

    @registry.tool("elasticsearch_index_document",
                   "Index a document in Elasticsearch",
                   ElasticsearchIndexRequest)
    async def index_document(params: ElasticsearchIndexRequest) -> dict:
        return await handler.index_document(
            index=params.index,
            document=params.document,
            id=params.id,
            refresh=params.refresh
        )

    @registry.tool("elasticsearch_get_indices",
                   "Get list of all Elasticsearch indices",
                   NoArguments)
    async def get_indices(params: NoArguments) -> list:
        return await handler.get_indices()

    return registry
