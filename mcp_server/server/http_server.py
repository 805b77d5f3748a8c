"""
HTTP transport: JSON-RPC over POST /mcp plus a GET /health probe

CORS is wide open; these servers are meant for local tutorials.
"""

import json
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mcp_server.core.errors import INTERNAL_ERROR
from mcp_server.core.schemas import JsonRpcResponse
from mcp_server.tools.catalog import ToolServer
from utils.logger import logger

router = APIRouter()


@router.post("/mcp")
async def handle_mcp(request: Request):
    dispatcher = request.app.state.dispatcher
    raw = await request.body()

    try:
        message = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Malformed JSON-RPC body: {e}")
        return JSONResponse(
            status_code=500,
            content=JsonRpcResponse.failure(
                None, INTERNAL_ERROR, f"Parse error: {e}").to_dict()
        )

    response = await dispatcher.handle(message)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response)


@router.get("/health")
async def health(request: Request):
    status_code, body = await request.app.state.tool_server.health()
    return JSONResponse(status_code=status_code, content=body)


def log_banner(tool_server: ToolServer, host: str, port: int) -> None:
    logger.info(f"{tool_server.name} MCP HTTP Server Started")
    logger.info(f"Server: http://{host}:{port}")
    logger.info(f"Endpoint: POST http://{host}:{port}/mcp (JSON-RPC)")
    logger.info(f"Health: GET http://{host}:{port}/health")
    for name in tool_server.registry.names:
        logger.info(f"  - {name}")
    logger.info(
        f"Test with: curl -X POST http://{host}:{port}/mcp -H \"Content-Type: application/json\" "
        "-d '{\"jsonrpc\":\"2.0\",\"id\":1,\"method\":\"tools/list\"}'")


def add_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )


def create_app(tool_server: ToolServer) -> FastAPI:
    """Build the FastAPI app serving one tool server through the JSON-RPC dispatcher."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await tool_server.check_backend()
        yield
        logger.info(f"Shutting down {tool_server.name}")
        await tool_server.aclose()

    app = FastAPI(
        title=f"{tool_server.name} MCP HTTP Server",
        description=f"JSON-RPC tool server ({tool_server.kind})",
        version=tool_server.version,
        lifespan=lifespan
    )
    app.state.tool_server = tool_server
    app.state.dispatcher = tool_server.dispatcher()

    add_cors(app)
    app.include_router(router)
    return app
