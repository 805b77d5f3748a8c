"""
ASGI entry point: `uvicorn main:app --port 8001`

Serves the tool set named by MCP_SERVER_KIND (default: elasticsearch) over
HTTP. Set MCP_USE_SDK=true to use the MCP SDK's streamable HTTP transport.
"""

import os

from dotenv import load_dotenv

from mcp_server.core.config import config
from mcp_server.server.http_server import create_app, log_banner
from mcp_server.server.sdk_server import create_sdk_app
from mcp_server.tools.catalog import build_server, default_port

load_dotenv()

SERVER_KIND = os.getenv("MCP_SERVER_KIND", "elasticsearch")
USE_SDK = os.getenv("MCP_USE_SDK", "false").lower() == "true"

config.validate()
tool_server = build_server(SERVER_KIND, config)
app = create_sdk_app(tool_server) if USE_SDK else create_app(tool_server)


if __name__ == "__main__":
    import uvicorn

    port = default_port(SERVER_KIND, config)
    log_banner(tool_server, config.server.host, port)
    uvicorn.run(app, host=config.server.host, port=port)
