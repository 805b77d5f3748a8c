"""
Chroma handler and tools against an in-memory client
"""

import asyncio
import json

import pytest

from mcp_server.core.chroma_handler import ChromaHandler
from mcp_server.core.dispatcher import JsonRpcDispatcher
from mcp_server.core.errors import INTERNAL_ERROR
from mcp_server.tools.chroma_tools import build_chroma_registry


def chroma_dispatcher(handler) -> JsonRpcDispatcher:
    return JsonRpcDispatcher(build_chroma_registry(handler), "ChromaDBToolServer")


async def call(dispatcher, name, arguments):
    response = await dispatcher.handle({
        "jsonrpc": "2.0", "id": 1, "method": "tools/call",
        "params": {"name": name, "arguments": arguments}
    })
    return response


async def test_query_returns_n_results_closest_first(chroma_handler):
    rows = await chroma_handler.query_collection("wireless mouse", n_results=2)

    assert len(rows) == 2
    distances = [row.relevance for row in rows]
    assert distances == sorted(distances)
    assert {row.fields["category"] for row in rows} == {"Accessory"}
    assert all(row.relevance_kind == "distance" for row in rows)
    assert all(row.document for row in rows)


async def test_query_defaults(fake_chroma):
    handler = ChromaHandler(fake_chroma, default_collection="products",
                            default_n_results=3)
    rows = await handler.query_collection("laptop")
    assert len(rows) == 3


async def test_query_unknown_collection(chroma_handler):
    with pytest.raises(ValueError):
        await chroma_handler.query_collection("laptop", collection="missing")


async def test_list_collections_and_info(chroma_handler):
    assert await chroma_handler.list_collections() == ["products"]

    info = await chroma_handler.get_collection_info("products")
    assert info == {
        "name": "products",
        "count": 4,
        "metadata": {"description": "Product catalog for e-commerce"},
    }


async def test_list_collections_accepts_plain_names(fake_chroma):
    async def names_only():
        return ["products", "customers"]

    fake_chroma.list_collections = names_only
    handler = ChromaHandler(fake_chroma)
    assert await handler.list_collections() == ["products", "customers"]


async def test_peek(chroma_handler):
    items = await chroma_handler.peek("products", limit=2)
    assert [item["id"] for item in items] == ["1", "2"]
    assert items[0]["metadata"]["name"] == 'MacBook Pro 16"'


async def test_lazy_connect(fake_chroma):
    connects = []

    async def connect():
        connects.append(1)
        return fake_chroma

    handler = ChromaHandler(connect=connect)
    assert connects == []

    assert await handler.version() == "0.6.3"
    assert await handler.heartbeat() == 1
    assert connects == [1]


def test_handler_needs_client_or_factory():
    with pytest.raises(ValueError):
        ChromaHandler()


async def test_query_tool_payload(chroma_handler):
    response = await call(chroma_dispatcher(chroma_handler), "chroma_query_collection",
                          {"collection": "products", "query": "laptop programming", "n_results": 2})

    rows = json.loads(response["result"]["content"][0]["text"])
    assert len(rows) == 2
    assert rows[0]["fields"]["name"] == "Dell XPS 15"
    assert rows[0]["distance"] <= rows[1]["distance"]
    assert "score" not in rows[0]


async def test_list_collections_tool(chroma_handler):
    response = await call(chroma_dispatcher(chroma_handler), "chroma_list_collections", {})
    assert json.loads(response["result"]["content"][0]["text"]) == ["products"]


async def test_collection_info_tool_unknown_collection(chroma_handler):
    response = await call(chroma_dispatcher(chroma_handler),
                          "chroma_get_collection_info", {"collection": "nope"})
    assert response["error"]["code"] == INTERNAL_ERROR
    assert "nope" in response["error"]["message"]


async def test_concurrent_first_use_connects_once(fake_chroma):
    connects = []

    async def connect():
        connects.append(1)
        await asyncio.sleep(0)
        return fake_chroma

    handler = ChromaHandler(connect=connect)
    names, version, rows = await asyncio.gather(
        handler.list_collections(),
        handler.version(),
        handler.query_collection("laptop", n_results=1),
    )

    assert connects == [1]
    assert names == ["products"]
    assert version == "0.6.3"
    assert len(rows) == 1
