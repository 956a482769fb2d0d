"""Tests for the JSON-RPC dispatcher shared by every transport."""

from __future__ import annotations

import orjson
import pytest

from wcag_mcp.ext.mcp import McpDispatcher
from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.foundation.errors import INTERNAL_ERROR


def _call(name: str, arguments: object = None, msg_id: object = 1) -> dict[str, object]:
    params: dict[str, object] = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return {"jsonrpc": "2.0", "method": "tools/call", "params": params, "id": msg_id}


class TestMethods:
    @pytest.mark.asyncio
    async def test_initialize(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle({"jsonrpc": "2.0", "method": "initialize", "params": {}, "id": 0})
        assert reply == {
            "jsonrpc": "2.0",
            "id": 0,
            "result": {
                "protocolVersion": "2024-11-05",
                "capabilities": {"tools": {}},
                "serverInfo": {"name": "wcag-mcp", "version": "2.0.0"},
            },
        }

    @pytest.mark.asyncio
    async def test_initialize_reports_configured_identity(self, registry) -> None:
        dispatcher = McpDispatcher(registry, ServerInfo(name="a11y", version="9.9.9", protocol_version="2025-03-26"))
        reply = await dispatcher.handle({"jsonrpc": "2.0", "method": "initialize", "id": 1})
        assert reply["result"]["serverInfo"] == {"name": "a11y", "version": "9.9.9"}
        assert reply["result"]["protocolVersion"] == "2025-03-26"

    @pytest.mark.asyncio
    async def test_tools_list(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle({"jsonrpc": "2.0", "method": "tools/list", "id": "abc"})
        tools = reply["result"]["tools"]
        assert reply["id"] == "abc"
        assert len(tools) == 20
        assert tools[0]["name"] == "list-principles"

    @pytest.mark.asyncio
    async def test_tools_call_wraps_text(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle(_call("get-criterion", {"ref_id": "1.4.3"}))
        content = reply["result"]["content"]
        assert content[0]["type"] == "text"
        assert "1.4.3" in content[0]["text"]
        assert "## Intent" in content[0]["text"]

    @pytest.mark.asyncio
    async def test_tools_call_without_arguments(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle(_call("list-principles"))
        assert reply["result"]["content"][0]["text"].startswith("# WCAG 2.2 Principles")

    @pytest.mark.asyncio
    async def test_not_found_is_a_result(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle(_call("get-criterion", {"ref_id": "9.9.9"}))
        assert "error" not in reply
        assert "No success criterion found" in reply["result"]["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_ping(self, dispatcher: McpDispatcher) -> None:
        assert await dispatcher.handle({"jsonrpc": "2.0", "method": "ping", "id": 7}) == {
            "jsonrpc": "2.0", "id": 7, "result": {},
        }

    @pytest.mark.asyncio
    async def test_notifications_get_no_response(self, dispatcher: McpDispatcher) -> None:
        assert await dispatcher.handle({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None
        assert await dispatcher.handle({"jsonrpc": "2.0", "method": "notifications/cancelled", "params": {}}) is None


class TestErrors:
    @pytest.mark.asyncio
    async def test_unknown_method(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle({"jsonrpc": "2.0", "method": "resources/list", "id": 3})
        assert reply == {
            "jsonrpc": "2.0", "id": 3,
            "error": {"code": INTERNAL_ERROR, "message": "Unknown method: resources/list"},
        }

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle(_call("nope"))
        assert reply["error"] == {"code": -32603, "message": "Unknown tool: nope"}

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle(_call("get-criterion", {}))
        assert reply["error"]["code"] == -32603
        assert "ref_id" in reply["error"]["message"]

    @pytest.mark.asyncio
    async def test_non_object_arguments(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle(_call("get-criterion", "1.4.3"))
        assert reply["error"]["message"] == "Tool arguments must be an object"

    @pytest.mark.asyncio
    async def test_missing_tool_name(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle({"jsonrpc": "2.0", "method": "tools/call", "params": {}, "id": 1})
        assert reply["error"]["code"] == -32603

    @pytest.mark.asyncio
    async def test_non_object_params(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle({"jsonrpc": "2.0", "method": "tools/call", "params": [1], "id": 1})
        assert reply["error"]["message"] == "Invalid params: expected an object"

    @pytest.mark.asyncio
    async def test_non_object_envelope(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle("ping")
        assert reply["id"] is None
        assert reply["error"]["code"] == -32603


class TestBatches:
    @pytest.mark.asyncio
    async def test_single_survivor_is_bare(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle_payload([
            {"jsonrpc": "2.0", "method": "ping", "id": 1},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
        ])
        assert reply == {"jsonrpc": "2.0", "id": 1, "result": {}}

    @pytest.mark.asyncio
    async def test_order_preserved(self, dispatcher: McpDispatcher) -> None:
        reply = await dispatcher.handle_payload([
            {"jsonrpc": "2.0", "method": "ping", "id": "a"},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            _call("nope", msg_id="b"),
            {"jsonrpc": "2.0", "method": "tools/list", "id": "c"},
        ])
        assert [r["id"] for r in reply] == ["a", "b", "c"]
        assert "error" in reply[1]

    @pytest.mark.asyncio
    async def test_only_notifications(self, dispatcher: McpDispatcher) -> None:
        assert await dispatcher.handle_payload([{"jsonrpc": "2.0", "method": "notifications/initialized"}]) == []

    @pytest.mark.asyncio
    async def test_single_envelope(self, dispatcher: McpDispatcher) -> None:
        assert await dispatcher.handle_payload({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None

    @pytest.mark.asyncio
    async def test_response_round_trips(self, dispatcher: McpDispatcher) -> None:
        """Serializing and re-parsing keeps id and result/error shape."""
        for request in (_call("list-principles", msg_id=41), _call("nope", msg_id="x")):
            reply = await dispatcher.handle(request)
            assert orjson.loads(orjson.dumps(reply)) == reply
