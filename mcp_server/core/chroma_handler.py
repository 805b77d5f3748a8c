"""
ChromaDB handler for the MCP servers, setup scripts and query console
Provides semantic (embedding distance) search over collections
"""

import asyncio
from typing import Any, Dict, List, Optional

from mcp_server.core.schemas import SearchRow
from utils.logger import logger


def _first(values: Optional[List[Any]], size: int) -> List[Any]:
    # query results are nested one list per query text; we always send one
    if not values or values[0] is None:
        return [None] * size
    return list(values[0])


class ChromaHandler:
    """Vector store backend adapter over a chromadb async client"""

    def __init__(self, client=None, embedding_function=None, default_collection: str = "products", default_n_results: int = 5, connect=None):
        if client is None and connect is None:
            raise ValueError("ChromaHandler needs a client or a connect factory")
        self.client = client
        self.connect = connect
        self._connect_lock = asyncio.Lock()
        self.embedding_function = embedding_function
        self.default_collection = default_collection
        self.default_n_results = default_n_results

    async def get_client(self):
        """Return the client, connecting on first use when built lazily.

        Concurrent first callers share one connect.
        """
        if self.client is None:
            async with self._connect_lock:
                if self.client is None:
                    self.client = await self.connect()
        return self.client

    async def _collection(self, name: str):
        client = await self.get_client()
        if self.embedding_function is not None:
            return await client.get_collection(name=name, embedding_function=self.embedding_function)
        return await client.get_collection(name=name)

    async def query_collection(
        self,
        query: str,
        collection: Optional[str] = None,
        n_results: Optional[int] = None
    ) -> List[SearchRow]:
        """
        Semantic search in one collection

        Args:
            query: natural language search text
            collection: collection name, defaults to the configured collection
            n_results: number of nearest neighbours to return

        Returns:
            rows ordered closest first (ascending distance)
        """
        collection = collection or self.default_collection
        n_results = n_results or self.default_n_results
        logger.debug(
            f"Querying Chroma collection {collection} for {query!r} (n_results={n_results})")

        coll = await self._collection(collection)
        results = await coll.query(
            query_texts=[query],
            n_results=n_results,
            include=["documents", "metadatas", "distances"]
        )

        ids = _first(results.get("ids"), 0)
        distances = _first(results.get("distances"), len(ids))
        metadatas = _first(results.get("metadatas"), len(ids))
        documents = _first(results.get("documents"), len(ids))

        rows = [
            SearchRow(
                id=str(doc_id),
                relevance=distance,
                fields=dict(metadata or {}),
                document=document,
                relevance_kind="distance"
            )
            for doc_id, distance, metadata, document in zip(ids, distances, metadatas, documents)
        ]
        rows.sort(key=lambda row: float("inf")
                  if row.relevance is None else row.relevance)

        logger.info(
            f"Chroma query on {collection} for {query!r}: {len(rows)} results")
        return rows

    async def list_collections(self) -> List[str]:
        client = await self.get_client()
        collections = await client.list_collections()
        # some chromadb releases return names, others Collection objects
        return [c if isinstance(c, str) else c.name for c in collections]

    async def get_collection_info(self, collection: str) -> Dict[str, Any]:
        coll = await self._collection(collection)
        count = await coll.count()
        return {
            "name": collection,
            "count": count,
            "metadata": dict(coll.metadata or {}),
        }

    async def peek(self, collection: str, limit: int = 5) -> List[Dict[str, Any]]:
        coll = await self._collection(collection)
        results = await coll.peek(limit=limit)
        ids = list(results.get("ids") or [])
        documents = list(results.get("documents") or [None] * len(ids))
        metadatas = list(results.get("metadatas") or [None] * len(ids))
        return [
            {"id": doc_id, "document": document, "metadata": dict(metadata or {})}
            for doc_id, document, metadata in zip(ids, documents, metadatas)
        ]

    async def version(self) -> str:
        client = await self.get_client()
        return await client.get_version()

    async def heartbeat(self) -> int:
        client = await self.get_client()
        return await client.heartbeat()
