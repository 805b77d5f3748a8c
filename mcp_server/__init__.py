"""
Minimal Model Context Protocol (MCP) servers for RAG demos

This package serves small tool sets (math, weather, Elasticsearch search and
indexing, ChromaDB semantic search) as JSON-RPC 2.0 over stdio or HTTP.

Modules:
    core: configuration, tool registry, JSON-RPC dispatcher, backend handlers
    tools: the tool catalog of each server kind
    server: stdio, HTTP and MCP SDK transports plus the command line entry point
"""

__version__ = "1.0.0"
