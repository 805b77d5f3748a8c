"""
Weather tool: a canned single-tool server used by the HTTP client demo
"""

from mcp_server.core.registry import ToolRegistry
from mcp_server.core.schemas import WeatherRequest


def build_weather_registry() -> ToolRegistry:
    registry = ToolRegistry()

    @registry.tool("get_weather", "Get weather for location", WeatherRequest)
    def get_weather(params: WeatherRequest) -> str:
        return f"It's always sunny in {params.location}"

    return registry
