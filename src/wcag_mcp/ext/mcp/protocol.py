"""JSON-RPC method table behind the stateless HTTP endpoint.

The dispatcher owns the protocol semantics (method routing, notification
handling, batch assembly, error envelopes); the HTTP adapter only moves
bytes. Stdio is served by the MCP SDK instead.

Example:
    >>> dispatcher = McpDispatcher(registry, ServerInfo())
    >>> await dispatcher.handle({"jsonrpc": "2.0", "method": "ping", "id": 1})
    {'jsonrpc': '2.0', 'id': 1, 'result': {}}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.foundation.errors import INTERNAL_ERROR, JsonRpcError, ToolException
from wcag_mcp.foundation.registry import ToolRegistry

logger = logging.getLogger("wcag_mcp.protocol")

JSONRPC_VERSION = "2.0"
NOTIFICATION_PREFIX = "notifications/"

Message = dict[str, Any]


def result_message(msg_id: object, result: object) -> Message:
    return {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "result": result}


def error_message(msg_id: object, code: int, message: str) -> Message:
    return {"jsonrpc": JSONRPC_VERSION, "id": msg_id, "error": {"code": code, "message": message}}


def text_content(text: str) -> dict[str, list[dict[str, str]]]:
    """MCP ``tools/call`` result wrapping one text part."""
    return {"content": [{"type": "text", "text": text}]}


class McpDispatcher:
    """Routes JSON-RPC envelopes to the tool registry.

    Every failure past envelope parsing is answered with code -32603 and
    the underlying message; transports never see exceptions.
    """

    __slots__ = ("_registry", "_info", "_methods")

    def __init__(self, registry: ToolRegistry, server_info: ServerInfo | None = None) -> None:
        self._registry = registry
        self._info = server_info or ServerInfo()
        self._methods: dict[str, Callable[[Mapping[str, Any]], object]] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "ping": lambda _params: {},
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def server_info(self) -> ServerInfo:
        return self._info

    # ─────────────────────────────────────────────────────────────────
    # Entry points
    # ─────────────────────────────────────────────────────────────────

    async def handle(self, message: object) -> Message | None:
        """Answer one envelope. ``None`` for notifications."""
        if not isinstance(message, Mapping):
            return error_message(None, INTERNAL_ERROR, "Invalid request: expected a JSON-RPC object")

        method = message.get("method")
        msg_id = message.get("id")
        if isinstance(method, str) and method.startswith(NOTIFICATION_PREFIX):
            logger.debug(f"notification {method}")
            return None

        try:
            return result_message(msg_id, self._dispatch(method, message.get("params")))
        except JsonRpcError as e:
            logger.warning(f"{method}: {e.message}")
            return error_message(msg_id, e.code, e.message)
        except ToolException as e:
            logger.warning(f"{method}: [{e.code}] {e.error.message}")
            return error_message(msg_id, INTERNAL_ERROR, e.error.message)
        except Exception as e:
            logger.exception(f"{method}: unexpected failure")
            return error_message(msg_id, INTERNAL_ERROR, str(e) or type(e).__name__)

    async def handle_payload(self, payload: object) -> Message | list[Message] | None:
        """Answer a single envelope or a batch.

        Batch members run strictly in order; notifications are dropped and a
        single surviving response is returned bare rather than in an array.
        """
        if not isinstance(payload, list):
            return await self.handle(payload)

        responses = [r for r in [await self.handle(m) for m in payload] if r is not None]
        return responses[0] if len(responses) == 1 else responses

    # ─────────────────────────────────────────────────────────────────
    # Methods
    # ─────────────────────────────────────────────────────────────────

    def _dispatch(self, method: object, params: object) -> object:
        handler = self._methods.get(method) if isinstance(method, str) else None
        if handler is None:
            raise JsonRpcError(f"Unknown method: {method}")
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise JsonRpcError("Invalid params: expected an object")
        return handler(params)

    def _initialize(self, params: Mapping[str, Any]) -> dict[str, object]:
        return {
            "protocolVersion": self._info.protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": self._info.as_mcp(),
        }

    def _list_tools(self, params: Mapping[str, Any]) -> dict[str, object]:
        return {"tools": self._registry.list_tools()}

    def _call_tool(self, params: Mapping[str, Any]) -> dict[str, object]:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise JsonRpcError("Invalid params: tools/call requires a tool name")
        return text_content(self._registry.execute(name, params.get("arguments")))
