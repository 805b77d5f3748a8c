"""
Command line entry point for the MCP demo servers

    python -m mcp_server.server.mcp_server --server math
    python -m mcp_server.server.mcp_server --server elasticsearch --transport http
    python -m mcp_server.server.mcp_server --server chroma --transport http --sdk
"""

import argparse
import asyncio
import os
import sys

from mcp_server.core.config import config
from mcp_server.tools.catalog import SERVER_BUILDERS, build_server, default_port
from utils.logger import logger


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve a small MCP tool set over stdio or HTTP")
    parser.add_argument("--server", choices=sorted(SERVER_BUILDERS),
                        default=os.getenv("MCP_SERVER_KIND", "math"),
                        help="which tool set to serve")
    parser.add_argument("--transport", choices=["stdio", "http"],
                        default=os.getenv("MCP_TRANSPORT", "stdio"))
    parser.add_argument("--sdk", action="store_true",
                        help="serve through the MCP SDK instead of the built-in dispatcher")
    parser.add_argument("--host", default=config.server.host)
    parser.add_argument("--port", type=int, default=None,
                        help="HTTP port (default depends on --server)")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    config.validate()
    tool_server = build_server(args.server, config)
    logger.info(
        f"Starting MCP server: {tool_server.name} v{tool_server.version} ({args.transport}{', sdk' if args.sdk else ''})")

    if args.transport == "stdio":
        if args.sdk:
            from mcp_server.server.sdk_server import run_sdk_stdio_server
            asyncio.run(run_sdk_stdio_server(tool_server))
        else:
            from mcp_server.server.stdio_server import run_stdio_server
            asyncio.run(run_stdio_server(tool_server))
        return

    import uvicorn

    from mcp_server.server.http_server import create_app, log_banner

    port = args.port or default_port(args.server, config)
    if args.sdk:
        from mcp_server.server.sdk_server import create_sdk_app
        app = create_sdk_app(tool_server)
    else:
        app = create_app(tool_server)
    log_banner(tool_server, args.host, port)
    uvicorn.run(app, host=args.host, port=port,
                log_level="debug" if config.server.debug else "info")


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        run(args)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.exception(f"Failed to start server: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
