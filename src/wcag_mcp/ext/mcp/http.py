"""Stateless HTTP adapter: one request carries one call or one batch.

Endpoints:
    POST    /  JSON-RPC call or batch
    GET     /  health check
    OPTIONS /  CORS preflight

Example:
    >>> app = create_api_app(dispatcher)
    >>> uvicorn.run(app, port=8000)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import orjson
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from wcag_mcp.foundation.errors import PARSE_ERROR

from .protocol import McpDispatcher, error_message

logger = logging.getLogger("wcag_mcp.http")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Accept, Mcp-Session-Id",
}


class OrjsonResponse(JSONResponse):
    """JSONResponse rendered with orjson."""

    def render(self, content: Any) -> bytes:
        return orjson.dumps(content)


API_METHODS = ["GET", "POST", "OPTIONS"]

Endpoint = Callable[[Request], Awaitable[Response]]


def create_api_endpoint(dispatcher: McpDispatcher) -> Endpoint:
    """Request handler serving the JSON-RPC method table statelessly."""
    registry = dispatcher.registry
    info = dispatcher.server_info

    async def endpoint(request: Request) -> Response:
        match request.method:
            case "OPTIONS":
                return Response(status_code=204, headers=CORS_HEADERS)
            case "GET":
                return OrjsonResponse({
                    "name": info.name,
                    "version": info.version,
                    "status": "healthy",
                    "protocol": "MCP JSON-RPC 2.0",
                    "tools": len(registry),
                }, headers=CORS_HEADERS)

        try:
            payload = orjson.loads(await request.body())
        except orjson.JSONDecodeError as e:
            logger.warning(f"malformed request body: {e}")
            return OrjsonResponse(
                error_message(None, PARSE_ERROR, f"Parse error: {e}"),
                status_code=400,
                headers=CORS_HEADERS,
            )

        reply = await dispatcher.handle_payload(payload)
        if reply is None:
            return Response(status_code=202, headers=CORS_HEADERS)
        return OrjsonResponse(reply, headers=CORS_HEADERS)

    return endpoint


def create_api_app(dispatcher: McpDispatcher) -> Starlette:
    """Starlette app with the stateless endpoint at its root."""
    return Starlette(routes=[Route("/", create_api_endpoint(dispatcher), methods=API_METHODS)])
