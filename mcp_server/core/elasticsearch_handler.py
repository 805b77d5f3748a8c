"""
Elasticsearch handler for the MCP servers and the driver scripts
Provides full-text search and indexing as a thin call-through to the client
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from elasticsearch import AsyncElasticsearch

from mcp_server.core.schemas import SearchRow
from utils.logger import logger


def _total_hits(total: Any) -> int:
    # hits.total is {"value": n, "relation": "eq"} on 7.x+ and a bare int before
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total or 0)


class ElasticsearchHandler:
    """Full-text search backend adapter"""

    def __init__(self, client: AsyncElasticsearch, default_size: int = 10, max_size: int = 100):
        self.client = client
        self.default_size = default_size
        self.max_size = max_size

    async def search(
        self,
        index: str,
        query: str,
        size: Optional[int] = None,
        fields: Sequence[str] = ("*",)
    ) -> Tuple[int, Optional[float], List[SearchRow]]:
        """
        Run a multi_match query against one index

        Args:
            index: index to search
            query: search text
            size: maximum number of hits, capped at max_size
            fields: fields the multi_match query covers

        Returns:
            (total hit count, max score, ranked rows)
        """
        size = min(size or self.default_size, self.max_size)
        es_query = {"multi_match": {"query": query, "fields": list(fields)}}
        logger.debug(
            f"Elasticsearch query on {index}: {es_query} (size={size})")

        response = await self.client.search(index=index, query=es_query, size=size)
        hits = response["hits"]

        rows = [
            SearchRow(
                id=str(hit["_id"]),
                relevance=hit.get("_score"),
                fields=hit.get("_source") or {},
                relevance_kind="score"
            )
            for hit in hits.get("hits", [])
        ]
        total = _total_hits(hits.get("total"))
        max_score = hits.get("max_score")

        logger.info(
            f"Elasticsearch search on {index} for {query!r}: {total} hits, max score {max_score}")
        return total, max_score, rows

    async def index_document(
        self,
        index: str,
        document: Dict[str, Any],
        id: Optional[str] = None,
        refresh: bool = False
    ) -> Dict[str, Any]:
        """Index one document; re-using an id overwrites the stored document."""
        kwargs = {"index": index, "document": document}
        if id is not None:
            kwargs["id"] = id
        if refresh:
            kwargs["refresh"] = "true"

        response = await self.client.index(**kwargs)
        logger.info(
            f"Indexed document {response['_id']} into {response['_index']}: {response['result']}")
        return {
            "result": response["result"],
            "id": response["_id"],
            "index": response["_index"],
        }

    async def get_indices(self) -> List[Dict[str, Any]]:
        response = await self.client.cat.indices(format="json")
        return [
            {
                "name": item.get("index"),
                "health": item.get("health"),
                "status": item.get("status"),
                "docsCount": item.get("docs.count"),
                "storeSize": item.get("store.size"),
            }
            for item in response
        ]

    async def refresh(self, index: str) -> None:
        await self.client.indices.refresh(index=index)

    async def info(self) -> Dict[str, Any]:
        response = await self.client.info()
        return {
            "cluster_name": response["cluster_name"],
            "version": response["version"]["number"],
        }

    async def health(self) -> Dict[str, Any]:
        response = await self.client.cluster.health()
        return {
            "status": response["status"],
            "cluster_name": response["cluster_name"],
        }

    async def close(self) -> None:
        await self.client.close()
