# Core module for the MCP servers
# Contains configuration, the tool registry, the JSON-RPC dispatcher and backend handlers

from .config import (ChromaConfig, Config, ElasticsearchConfig,
                     EmbeddingConfig, ModelConfig, ServerConfig)
from .dispatcher import JsonRpcDispatcher
from .errors import ToolInputError, UnknownMethod, UnknownTool
from .registry import ToolRegistry, ToolSpec
from .schemas import JsonRpcRequest, JsonRpcResponse, SearchRow

__all__ = [
    'Config',
    'ElasticsearchConfig',
    'ChromaConfig',
    'EmbeddingConfig',
    'ModelConfig',
    'ServerConfig',
    'JsonRpcDispatcher',
    'ToolRegistry',
    'ToolSpec',
    'UnknownTool',
    'UnknownMethod',
    'ToolInputError',
    'JsonRpcRequest',
    'JsonRpcResponse',
    'SearchRow'
]
