"""OpenAPI 3.1 document for the REST bridge, built from the registry."""

from __future__ import annotations

from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.foundation.registry import ToolRegistry

OPENAPI_VERSION = "3.1.0"
BRIDGE_PREFIX = "/bridge"

API_DESCRIPTION = (
    "REST bridge for WCAG MCP tools. Query WCAG 2.2 guidelines, success criteria, techniques, "
    "glossary terms, and Understanding documentation."
)

_CONTENT_SCHEMA = {
    "type": "object",
    "properties": {"content": {"type": "string", "description": "Tool output text"}},
    "required": ["content"],
}


def operation_id(tool_name: str) -> str:
    return tool_name.replace("-", "_")


def build_openapi_spec(
    registry: ToolRegistry,
    base_url: str,
    server_info: ServerInfo | None = None,
) -> dict[str, object]:
    """One ``POST /bridge/tools/{name}`` operation per registered tool.

    Single bearer security scheme and an empty ``components.schemas``
    keep the document within what GPT Actions importers accept.
    """
    info = server_info or ServerInfo()
    paths: dict[str, object] = {}
    for tool in registry:
        name = tool.metadata.name
        paths[f"{BRIDGE_PREFIX}/tools/{name}"] = {
            "post": {
                "operationId": operation_id(name),
                "summary": name,
                "description": tool.metadata.description,
                "security": [{"bearerAuth": []}],
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": tool.input_schema()}},
                },
                "responses": {
                    "200": {
                        "description": "Tool result (MCP text content)",
                        "content": {"application/json": {"schema": _CONTENT_SCHEMA}},
                    },
                    "400": {"description": "Invalid request body or parameters"},
                    "401": {"description": "Missing or invalid API key"},
                    "502": {"description": "Upstream MCP error"},
                },
            },
        }

    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": "WCAG MCP API", "description": API_DESCRIPTION, "version": info.version},
        "servers": [{"url": base_url.rstrip("/")}],
        "paths": paths,
        "components": {
            "schemas": {},
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "API Key",
                    "description": "Send BRIDGE_API_KEY as a Bearer token.",
                },
            },
        },
        "security": [{"bearerAuth": []}],
    }
