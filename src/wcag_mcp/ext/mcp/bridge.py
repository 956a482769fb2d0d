"""REST bridge: path-based tool calls forwarded to the JSON-RPC backend.

Endpoints (relative to the mount point, normally ``/bridge``):
    GET  /openapi.json   API description, rebuilt per request
    POST /tools/{name}   JSON body = tool arguments -> {"content": text}

The bridge never runs tools itself. Every call is an HTTP round-trip to
the JSON-RPC adapter, in-process or remote.
"""

from __future__ import annotations

import hmac
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import orjson
from pydantic import SecretStr
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from wcag_mcp.foundation.errors import BridgeUpstreamError
from wcag_mcp.foundation.registry import ToolRegistry

from .http import OrjsonResponse
from .openapi import build_openapi_spec

logger = logging.getLogger("wcag_mcp.bridge")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Accept, Authorization, x-api-key",
}


# ─────────────────────────────────────────────────────────────────────────────
# Authorization
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class BridgeAuth:
    """Shared-secret check. No key configured means every caller is authorized."""

    api_key: str | None = None

    @classmethod
    def from_secret(cls, secret: SecretStr | None) -> BridgeAuth:
        return cls(secret.get_secret_value() if secret else None)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def authorize(self, headers: Mapping[str, str]) -> bool:
        """Accept ``Authorization: Bearer <key>`` or ``x-api-key: <key>``."""
        if not self.api_key:
            return True
        auth = headers.get("authorization", "")
        bearer = auth[len("Bearer "):].strip() if auth.startswith("Bearer ") else ""
        provided = bearer or headers.get("x-api-key", "")
        return bool(provided) and hmac.compare_digest(provided.encode(), self.api_key.encode())


# ─────────────────────────────────────────────────────────────────────────────
# Backend client
# ─────────────────────────────────────────────────────────────────────────────


class McpBackend:
    """``tools/call`` over HTTP against a JSON-RPC endpoint.

    Failures surface as ``BridgeUpstreamError`` carrying the status the
    bridge should answer with.
    """

    __slots__ = ("url", "_client", "_owns_client", "_transport", "_timeout")

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client  # Lazy when owned
        self._transport = transport
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport, timeout=self._timeout)
        return self._client

    async def call_tool(self, name: str, arguments: object) -> str:
        body = {
            "jsonrpc": "2.0",
            "method": "tools/call",
            "params": {"name": name, "arguments": arguments if arguments is not None else {}},
            "id": 1,
        }
        try:
            response = await self._get_client().post(
                self.url, content=orjson.dumps(body), headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise BridgeUpstreamError(f"MCP backend unreachable: {e}") from e

        try:
            data = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise BridgeUpstreamError(f"MCP backend returned non-JSON: {response.status_code}") from e

        if not response.is_success:
            raise BridgeUpstreamError(
                _error_text(data) or response.reason_phrase,
                status=400 if response.is_client_error else 502,
            )
        if not isinstance(data, dict):
            raise BridgeUpstreamError("MCP backend returned an unexpected payload")
        if data.get("error"):
            raise BridgeUpstreamError(_error_text(data) or "MCP error", status=400)

        result = data.get("result")
        content = result.get("content") if isinstance(result, dict) else None
        if not isinstance(content, list):
            return ""
        text = next((part.get("text") for part in content if isinstance(part, dict) and part.get("type") == "text"), None)
        return text or ""

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


def _error_text(data: object) -> str | None:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return data.get("message") or None


# ─────────────────────────────────────────────────────────────────────────────
# App
# ─────────────────────────────────────────────────────────────────────────────


def _json(content: Any, status_code: int = 200) -> OrjsonResponse:
    return OrjsonResponse(content, status_code=status_code, headers=CORS_HEADERS)


def create_bridge_app(
    registry: ToolRegistry,
    backend: McpBackend,
    auth: BridgeAuth | None = None,
    public_url: str | None = None,
) -> Starlette:
    """Starlette app for the REST bridge. Mount it at ``/bridge``."""
    auth = auth or BridgeAuth()

    async def openapi(request: Request) -> Response:
        if public_url:
            base_url = public_url
        else:
            scheme = request.headers.get("x-forwarded-proto", request.url.scheme)
            base_url = f"{scheme}://{request.url.netloc}"
        return _json(build_openapi_spec(registry, base_url))

    async def call_tool(request: Request) -> Response:
        name = request.path_params["name"]
        if name not in registry:
            return _json({"error": f"Unknown tool: {name}"}, 404)
        if not auth.authorize(request.headers):
            logger.warning(f"rejected call to {name}: missing or invalid API key")
            return _json({"error": "Missing or invalid API key"}, 401)

        raw = await request.body()
        try:
            arguments = orjson.loads(raw) if raw.strip() else {}
        except orjson.JSONDecodeError:
            return _json({"error": "Invalid JSON body"}, 400)

        try:
            text = await backend.call_tool(name, arguments)
        except BridgeUpstreamError as e:
            logger.warning(f"{name}: upstream {e.status}: {e.message}")
            return _json({"error": e.message}, e.status)
        return _json({"content": text})

    async def missing_name(request: Request) -> Response:
        return _json({"error": "Tool name missing"}, 404)

    async def preflight(request: Request) -> Response:
        return Response(status_code=204, headers=CORS_HEADERS)

    async def not_found(request: Request, exc: HTTPException) -> Response:
        return _json({"error": "Not found"}, 404)

    return Starlette(
        routes=[
            Route("/openapi.json", openapi, methods=["GET"]),
            Route("/tools/{name}", call_tool, methods=["POST"]),
            Route("/tools/", missing_name, methods=["POST"]),
            Route("/{path:path}", preflight, methods=["OPTIONS"]),
        ],
        exception_handlers={404: not_found, 405: not_found},
    )
