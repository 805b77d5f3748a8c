"""Transports for the MCP servers.

`stdio_server` and `http_server` serve the hand-rolled JSON-RPC dispatcher,
`sdk_server` bridges the same tool registries into the MCP SDK, and
`mcp_server` is the command line entry point. Submodules are imported
explicitly so `python -m mcp_server.server.mcp_server` does not import
itself twice.
"""
