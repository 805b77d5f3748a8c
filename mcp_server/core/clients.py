"""
Factories for the external client handles

Each process builds its clients once from the configuration and passes
them into the handlers that need them.
"""

from elasticsearch import AsyncElasticsearch

from mcp_server.core.chroma_handler import ChromaHandler
from mcp_server.core.config import Config
from mcp_server.core.elasticsearch_handler import ElasticsearchHandler
from utils.logger import logger


def create_elasticsearch_handler(config: Config) -> ElasticsearchHandler:
    client = AsyncElasticsearch(config.elasticsearch.url)
    return ElasticsearchHandler(
        client,
        default_size=config.elasticsearch.default_size,
        max_size=config.elasticsearch.max_size
    )


def create_embedding_function(config: Config):
    """Resolve the embedding function selector into a chromadb embedding function."""
    from chromadb.utils import embedding_functions

    selector = config.chroma.embedding_function
    if selector == "openai":
        return embedding_functions.OpenAIEmbeddingFunction(
            api_key=config.embedding.api_key,
            api_base=config.embedding.base_url,
            model_name=config.embedding.model_name
        )
    if selector == "default":
        return embedding_functions.DefaultEmbeddingFunction()
    raise ValueError(f"Unknown embedding function: {selector}")


def create_chroma_handler(config: Config) -> ChromaHandler:
    """Build a handler that connects to Chroma on first use."""
    async def connect():
        import chromadb

        logger.debug(f"Connecting to ChromaDB at {config.chroma.url}")
        return await chromadb.AsyncHttpClient(
            host=config.chroma.host,
            port=config.chroma.port,
            ssl=config.chroma.ssl
        )

    return ChromaHandler(
        connect=connect,
        embedding_function=create_embedding_function(config),
        default_collection=config.chroma.default_collection,
        default_n_results=config.chroma.default_n_results
    )


def create_chat_model(config: Config):
    """Build the Gemini chat model used by the driver scripts."""
    from langchain_google_genai import ChatGoogleGenerativeAI

    if not config.model.api_key:
        raise ValueError("GOOGLE_API_KEY is required. Set it in .env")

    logger.debug(f"Using chat model {config.model.model_name}")
    return ChatGoogleGenerativeAI(
        model=config.model.model_name,
        temperature=config.model.temperature,
        google_api_key=config.model.api_key
    )
