"""
Server catalog: maps a server kind to the tools, backend and health probe it serves
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from mcp_server.core.clients import (create_chroma_handler,
                                     create_elasticsearch_handler)
from mcp_server.core.config import Config
from mcp_server.core.dispatcher import JsonRpcDispatcher
from mcp_server.core.registry import ToolRegistry
from mcp_server.tools.chroma_tools import build_chroma_registry
from mcp_server.tools.elasticsearch_tools import build_elasticsearch_registry
from mcp_server.tools.math_tools import build_math_registry
from mcp_server.tools.weather_tools import build_weather_registry
from utils.logger import logger

SERVER_NAMES = {
    "math": "math-server",
    "weather": "weather-server",
    "elasticsearch": "ElasticsearchToolServer",
    "chroma": "ChromaDBToolServer",
}

DEFAULT_PORTS = {
    "math": 8000,
    "weather": 8000,
    "elasticsearch": 8001,
    "chroma": 8002,
}


@dataclass
class ToolServer:
    """Everything a transport needs to serve one kind of MCP server."""
    kind: str
    name: str
    version: str
    registry: ToolRegistry
    backend: Optional[str] = None
    probe: Optional[Callable[[], Awaitable[Dict[str, Any]]]] = None
    closer: Optional[Callable[[], Awaitable[None]]] = None

    def dispatcher(self, logger=None) -> JsonRpcDispatcher:
        return JsonRpcDispatcher(self.registry, self.name, self.version, logger=logger)

    async def check_backend(self) -> bool:
        """Probe the backend once at startup; failures are logged, never raised."""
        if self.probe is None:
            return True
        try:
            details = await self.probe()
            logger.info(f"Connected to {self.backend}: {details}")
            return True
        except Exception as e:
            logger.warning(
                f"Could not connect to {self.backend}: {e}. Tool calls will fail until it is reachable")
            return False

    async def health(self) -> Tuple[int, Dict[str, Any]]:
        """Return (HTTP status, body) for GET /health."""
        body: Dict[str, Any] = {"status": "ok", "mcp_server": "running"}
        if self.probe is None:
            return 200, body
        try:
            body[self.backend] = await self.probe()
            return 200, body
        except Exception as e:
            logger.warning(f"Health check failed for {self.backend}: {e}")
            return 503, {"status": "error", self.backend: "disconnected"}

    async def aclose(self) -> None:
        if self.closer is not None:
            await self.closer()


def build_math_server(config: Config) -> ToolServer:
    return ToolServer("math", config.server.name or SERVER_NAMES["math"],
                      config.server.version, build_math_registry())


def build_weather_server(config: Config) -> ToolServer:
    return ToolServer("weather", config.server.name or SERVER_NAMES["weather"],
                      config.server.version, build_weather_registry())


def build_elasticsearch_server(config: Config) -> ToolServer:
    handler = create_elasticsearch_handler(config)

    async def probe() -> Dict[str, Any]:
        health = await handler.health()
        health["url"] = config.elasticsearch.url
        return health

    return ToolServer(
        "elasticsearch",
        config.server.name or SERVER_NAMES["elasticsearch"],
        config.server.version,
        build_elasticsearch_registry(handler),
        backend="elasticsearch",
        probe=probe,
        closer=handler.close
    )


def build_chroma_server(config: Config) -> ToolServer:
    handler = create_chroma_handler(config)

    async def probe() -> Dict[str, Any]:
        return {"version": await handler.version(), "url": config.chroma.url}

    return ToolServer(
        "chroma",
        config.server.name or SERVER_NAMES["chroma"],
        config.server.version,
        build_chroma_registry(handler),
        backend="chromadb",
        probe=probe
    )


SERVER_BUILDERS: Dict[str, Callable[[Config], ToolServer]] = {
    "math": build_math_server,
    "weather": build_weather_server,
    "elasticsearch": build_elasticsearch_server,
    "chroma": build_chroma_server,
}


def build_server(kind: str, config: Config) -> ToolServer:
    try:
        builder = SERVER_BUILDERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown server kind {kind!r}; expected one of {', '.join(SERVER_BUILDERS)}") from None
    return builder(config)


def default_port(kind: str, config: Config) -> int:
    return config.server.port or DEFAULT_PORTS[kind]
