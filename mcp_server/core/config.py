"""
Configuration management for the MCP demo servers and drivers
"""

import os
from dataclasses import dataclass, field
from typing import List
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

EMBEDDING_FUNCTIONS = ("default", "openai")


@dataclass
class ElasticsearchConfig:
    """Full-text search backend configuration"""
    url: str = "http://localhost:9200"
    default_size: int = 10
    max_size: int = 100
    # fields used by the driver scripts; the MCP search tool matches on all fields
    product_fields: List[str] = field(
        default_factory=lambda: ["name", "description", "category"])


@dataclass
class ChromaConfig:
    """Vector store configuration"""
    url: str = "http://localhost:8000"
    embedding_function: str = "default"
    default_collection: str = "products"
    default_n_results: int = 5

    @property
    def host(self) -> str:
        return urlparse(self.url).hostname or "localhost"

    @property
    def port(self) -> int:
        return urlparse(self.url).port or 8000

    @property
    def ssl(self) -> bool:
        return urlparse(self.url).scheme == "https"


@dataclass
class EmbeddingConfig:
    """OpenAI embedding service configuration, used when chroma.embedding_function == "openai" """
    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model_name: str = "text-embedding-3-small"


@dataclass
class ModelConfig:
    """Chat model configuration"""
    api_key: str = ""
    model_name: str = "gemini-2.5-flash"
    temperature: float = 0.0


@dataclass
class ServerConfig:
    """MCP server configuration; name and port default per server kind when unset"""
    name: str = ""
    version: str = "1.0.0"
    port: int = 0
    host: str = "localhost"
    debug: bool = False


class Config:
    """Main configuration class"""

    def __init__(self):

        self.elasticsearch = ElasticsearchConfig(
            url=os.getenv("ELASTICSEARCH_URL", "http://localhost:9200"),
            default_size=int(os.getenv("DEFAULT_SEARCH_SIZE", "10")),
            max_size=int(os.getenv("MAX_SEARCH_SIZE", "100"))
        )

        self.chroma = ChromaConfig(
            url=os.getenv("CHROMA_URL", "http://localhost:8000"),
            embedding_function=os.getenv(
                "CHROMA_EMBEDDING_FUNCTION", "default").lower(),
            default_collection=os.getenv(
                "CHROMA_DEFAULT_COLLECTION", "products")
        )

        self.embedding = EmbeddingConfig(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            base_url=os.getenv("OPENAI_URL", "https://api.openai.com/v1"),
            model_name=os.getenv("EMBEDDING_MODEL_NAME",
                                 "text-embedding-3-small")
        )

        self.model = ModelConfig(
            api_key=os.getenv("GOOGLE_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            temperature=float(os.getenv("MODEL_TEMPERATURE", "0"))
        )

        self.server = ServerConfig(
            name=os.getenv("MCP_SERVER_NAME", ""),
            version=os.getenv("MCP_SERVER_VERSION", "1.0.0"),
            port=int(os.getenv("MCP_PORT") or 0),
            host=os.getenv("MCP_HOST", "localhost"),
            debug=os.getenv("DEBUG", "false").lower() == "true"
        )

    def validate(self) -> bool:
        """Validate configuration"""
        if self.chroma.embedding_function not in EMBEDDING_FUNCTIONS:
            raise ValueError(
                f"CHROMA_EMBEDDING_FUNCTION must be one of {', '.join(EMBEDDING_FUNCTIONS)}")

        if self.chroma.embedding_function == "openai" and not self.embedding.api_key:
            raise ValueError(
                "OPENAI_API_KEY is required for the openai embedding function")

        if self.elasticsearch.max_size < 1:
            raise ValueError("MAX_SEARCH_SIZE must be at least 1")

        if self.elasticsearch.default_size < 1 or self.elasticsearch.default_size > self.elasticsearch.max_size:
            raise ValueError(
                f"Search size must be between 1 and {self.elasticsearch.max_size}")

        return True


# Global config instance
config = Config()
