# Tool catalogs, one module per MCP server kind

from .catalog import (DEFAULT_PORTS, SERVER_BUILDERS, ToolServer,
                      build_server, default_port)

__all__ = [
    'DEFAULT_PORTS',
    'SERVER_BUILDERS',
    'ToolServer',
    'build_server',
    'default_port'
]
