"""MCP transports for wcag_mcp.

Three front ends over one ``ToolRegistry``:

1. **Stdio** - the MCP SDK's low-level server, for local MCP clients
2. **Stateless HTTP** - ``McpDispatcher`` answering one call or batch per request
3. **REST bridge** - ``POST /bridge/tools/{name}`` plus an OpenAPI document,
   for clients that speak plain REST (e.g. GPT Actions)

Example - stdio:
    >>> StdioServer(registry).run()

Example - HTTP:
    >>> app = create_api_app(McpDispatcher(registry))
"""

from .bridge import BridgeAuth, McpBackend, create_bridge_app
from .http import API_METHODS, CORS_HEADERS, OrjsonResponse, create_api_app, create_api_endpoint
from .openapi import build_openapi_spec, operation_id
from .protocol import McpDispatcher, error_message, result_message, text_content
from .stdio import StdioServer

__all__ = [
    "McpDispatcher", "error_message", "result_message", "text_content",
    "StdioServer",
    "create_api_app", "create_api_endpoint", "API_METHODS", "OrjsonResponse", "CORS_HEADERS",
    "create_bridge_app", "BridgeAuth", "McpBackend",
    "build_openapi_spec", "operation_id",
]
