"""
Shared fixtures: in-memory stand-ins for the Elasticsearch and Chroma clients
"""

import os
import re
import uuid

os.environ.setdefault("LOG_FILE_ENABLED", "false")

import pytest  # noqa: E402

from mcp_server.core.chroma_handler import ChromaHandler  # noqa: E402
from mcp_server.core.elasticsearch_handler import \
    ElasticsearchHandler  # noqa: E402

PRODUCTS = [
    {"id": "1", "name": "MacBook Pro 16\"", "category": "Laptop", "price": 2499,
     "description": "Powerful laptop with M3 Pro chip, 16GB RAM, 512GB SSD", "stock": 15},
    {"id": "2", "name": "Dell XPS 15", "category": "Laptop", "price": 1799,
     "description": "High performance laptop with Intel i9, 32GB RAM, great for programming", "stock": 8},
    {"id": "4", "name": "Apple Magic Mouse", "category": "Accessory", "price": 79,
     "description": "Wireless rechargeable mouse", "stock": 50},
    {"id": "5", "name": "Logitech MX Master 3", "category": "Accessory", "price": 99,
     "description": "Advanced wireless mouse for productivity", "stock": 30},
]


def tokens(text) -> set:
    return set(re.findall(r"[a-z0-9]+", str(text).lower()))


class FakeCat:
    def __init__(self, es):
        self.es = es

    async def indices(self, format=None):
        return [
            {"index": name, "health": "yellow", "status": "open",
             "docs.count": str(len(docs)), "store.size": "1kb"}
            for name, docs in self.es.visible.items()
        ]


class FakeIndices:
    def __init__(self, es):
        self.es = es

    async def refresh(self, index):
        self.es.visible.setdefault(index, {}).update(
            self.es.pending.pop(index, {}))


class FakeCluster:
    def __init__(self, es):
        self.es = es

    async def health(self):
        if self.es.down:
            raise ConnectionRefusedError("Connection refused")
        return {"status": "green", "cluster_name": "docker-cluster"}


class FakeElasticsearch:
    """Keeps documents in dicts; a write is searchable only after a refresh."""

    def __init__(self):
        self.pending = {}
        self.visible = {}
        self.down = False
        self.closed = False
        self.searches = []
        self.cat = FakeCat(self)
        self.indices = FakeIndices(self)
        self.cluster = FakeCluster(self)

    async def search(self, index, query, size=10):
        if self.down:
            raise ConnectionRefusedError("Connection refused")
        self.searches.append({"index": index, "query": query, "size": size})
        match = query["multi_match"]
        wanted = tokens(match["query"])
        fields = match["fields"]

        hits = []
        for doc_id, source in self.visible.get(index, {}).items():
            values = source.values() if fields == [
                "*"] else [source.get(f, "") for f in fields]
            score = float(sum(len(wanted & tokens(v)) for v in values))
            if score > 0:
                hits.append({"_index": index, "_id": doc_id,
                            "_score": score, "_source": source})
        hits.sort(key=lambda h: h["_score"], reverse=True)
        return {
            "hits": {
                "total": {"value": len(hits), "relation": "eq"},
                "max_score": hits[0]["_score"] if hits else None,
                "hits": hits[:size],
            }
        }

    async def index(self, index, document, id=None, refresh=None):
        doc_id = id or uuid.uuid4().hex
        exists = doc_id in self.visible.get(
            index, {}) or doc_id in self.pending.get(index, {})
        self.pending.setdefault(index, {})[doc_id] = dict(document)
        if refresh:
            await self.indices.refresh(index)
        return {"_index": index, "_id": doc_id, "result": "updated" if exists else "created"}

    async def info(self):
        return {"cluster_name": "docker-cluster", "version": {"number": "8.15.0"}}

    async def close(self):
        self.closed = True

    def count(self, index) -> int:
        return len(self.visible.get(index, {}) | self.pending.get(index, {}))


class FakeCollection:
    """Distance is the share of query words missing from the document."""

    def __init__(self, name, metadata=None):
        self.name = name
        self.metadata = metadata
        self.items = {}

    def add(self, ids, documents, metadatas):
        for doc_id, document, metadata in zip(ids, documents, metadatas):
            self.items[doc_id] = (document, metadata)

    async def query(self, query_texts, n_results, include=None):
        wanted = tokens(query_texts[0])
        scored = []
        for doc_id, (document, metadata) in self.items.items():
            distance = 1.0 - len(wanted & tokens(document)) / max(len(wanted), 1)
            scored.append((distance, doc_id, document, metadata))
        nearest = sorted(scored)[:n_results]
        # farthest first, so callers cannot rely on the backend's order
        nearest.reverse()
        return {
            "ids": [[s[1] for s in nearest]],
            "distances": [[s[0] for s in nearest]],
            "documents": [[s[2] for s in nearest]],
            "metadatas": [[s[3] for s in nearest]],
        }

    async def count(self):
        return len(self.items)

    async def peek(self, limit=10):
        items = list(self.items.items())[:limit]
        return {
            "ids": [i[0] for i in items],
            "documents": [i[1][0] for i in items],
            "metadatas": [i[1][1] for i in items],
        }


class FakeCollectionRef:
    def __init__(self, name):
        self.name = name


class FakeChromaClient:
    def __init__(self):
        self.collections = {}

    async def get_collection(self, name, embedding_function=None):
        try:
            return self.collections[name]
        except KeyError:
            raise ValueError(f"Collection {name} does not exist.") from None

    async def list_collections(self):
        return [FakeCollectionRef(name) for name in self.collections]

    async def get_version(self):
        return "0.6.3"

    async def heartbeat(self):
        return 1


def product_document(p) -> str:
    return f"{p['name']}. {p['description']}. Category: {p['category']}. Price: ${p['price']}"


@pytest.fixture
def fake_es():
    es = FakeElasticsearch()
    for product in PRODUCTS:
        es.visible.setdefault("products", {})[product["id"]] = dict(product)
    return es


@pytest.fixture
def es_handler(fake_es):
    return ElasticsearchHandler(fake_es)


@pytest.fixture
def fake_chroma():
    client = FakeChromaClient()
    collection = FakeCollection(
        "products", {"description": "Product catalog for e-commerce"})
    collection.add(
        ids=[p["id"] for p in PRODUCTS],
        documents=[product_document(p) for p in PRODUCTS],
        metadatas=[{"name": p["name"], "category": p["category"], "price": p["price"]}
                   for p in PRODUCTS]
    )
    client.collections["products"] = collection
    return client


@pytest.fixture
def chroma_handler(fake_chroma):
    return ChromaHandler(fake_chroma)
