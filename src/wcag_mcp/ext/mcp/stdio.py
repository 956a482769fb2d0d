"""MCP over stdin/stdout, served by the MCP SDK's low-level server.

The SDK owns framing, the initialize handshake and ping. This module maps
``tools/list`` and ``tools/call`` onto the registry. Logs go to stderr
because stdout carries the protocol stream.
"""

from __future__ import annotations

import logging
from typing import Any

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.foundation.errors import ToolException
from wcag_mcp.foundation.registry import ToolRegistry

logger = logging.getLogger("wcag_mcp.stdio")


class StdioServer:
    """SDK-backed server for local MCP clients (Claude Desktop, Cursor, etc.).

    Example:
        >>> StdioServer(registry, ServerInfo()).run()  # blocks until stdin closes
    """

    __slots__ = ("_registry", "_info", "_server")

    def __init__(self, registry: ToolRegistry, server_info: ServerInfo | None = None) -> None:
        self._registry = registry
        self._info = server_info or ServerInfo()
        self._server = self._create_server()

    @property
    def server(self) -> Server:
        """Underlying low-level SDK server."""
        return self._server

    def _create_server(self) -> Server:
        server: Server = Server(self._info.name, version=self._info.version)
        registry = self._registry

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [types.Tool.model_validate(d) for d in registry.list_tools()]

        # Arguments are validated by the tool's own params schema
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
            try:
                text = registry.execute(name, arguments)
            except ToolException as e:
                # SDK turns the raised error into an isError result
                logger.warning(f"{name}: [{e.code}] {e.error.message}")
                raise
            return [types.TextContent(type="text", text=text)]

        return server

    async def serve(self) -> None:
        """Process messages until stdin closes."""
        logger.info(f"{self._info.name} {self._info.version} running on stdio")
        async with stdio_server() as (read_stream, write_stream):
            await self._server.run(read_stream, write_stream, self._server.create_initialization_options())
        logger.info("stdin closed, shutting down")

    def run(self) -> None:
        anyio.run(self.serve)
