"""
Configuration loading and validation
"""

import pytest

from mcp_server.core.config import Config


def test_defaults(monkeypatch):
    for name in ("ELASTICSEARCH_URL", "CHROMA_URL", "CHROMA_EMBEDDING_FUNCTION",
                 "MCP_PORT", "MCP_SERVER_NAME", "DEFAULT_SEARCH_SIZE", "MAX_SEARCH_SIZE"):
        monkeypatch.delenv(name, raising=False)

    config = Config()

    assert config.elasticsearch.url == "http://localhost:9200"
    assert config.elasticsearch.default_size == 10
    assert config.chroma.embedding_function == "default"
    assert config.chroma.default_collection == "products"
    assert config.server.port == 0
    assert config.validate()


def test_chroma_url_parts(monkeypatch):
    monkeypatch.setenv("CHROMA_URL", "https://chroma.internal:8443")
    config = Config()

    assert config.chroma.host == "chroma.internal"
    assert config.chroma.port == 8443
    assert config.chroma.ssl


def test_unknown_embedding_function(monkeypatch):
    monkeypatch.setenv("CHROMA_EMBEDDING_FUNCTION", "cohere")

    with pytest.raises(ValueError, match="CHROMA_EMBEDDING_FUNCTION"):
        Config().validate()


def test_openai_embeddings_need_a_key(monkeypatch):
    monkeypatch.setenv("CHROMA_EMBEDDING_FUNCTION", "OpenAI")
    monkeypatch.setenv("OPENAI_API_KEY", "")

    config = Config()
    assert config.chroma.embedding_function == "openai"
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        config.validate()


def test_search_size_bounds(monkeypatch):
    monkeypatch.setenv("DEFAULT_SEARCH_SIZE", "50")
    monkeypatch.setenv("MAX_SEARCH_SIZE", "20")

    with pytest.raises(ValueError):
        Config().validate()
