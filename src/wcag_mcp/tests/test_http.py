"""Tests for the stateless HTTP adapter and the composed application."""

from __future__ import annotations

import httpx
import pytest
from starlette.testclient import TestClient

from wcag_mcp.ext.mcp import McpBackend, McpDispatcher, create_api_app
from wcag_mcp.foundation.config import WcagSettings
from wcag_mcp.model import WcagDocument
from wcag_mcp.server import create_app


@pytest.fixture
def client(dispatcher: McpDispatcher) -> TestClient:
    return TestClient(create_api_app(dispatcher))


class TestStatelessAdapter:
    def test_single_call(self, client: TestClient) -> None:
        response = client.post("/", json={
            "jsonrpc": "2.0", "method": "tools/call",
            "params": {"name": "get-criterion", "arguments": {"ref_id": "1.4.3"}}, "id": 1,
        })
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["id"] == 1
        assert "## Intent" in body["result"]["content"][0]["text"]

    def test_lone_notification_is_accepted(self, client: TestClient) -> None:
        response = client.post("/", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert response.status_code == 202
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"

    def test_batch_with_single_survivor(self, client: TestClient) -> None:
        response = client.post("/", json=[
            {"jsonrpc": "2.0", "method": "ping", "id": 1},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
        ])
        assert response.status_code == 200
        assert response.json() == {"jsonrpc": "2.0", "id": 1, "result": {}}

    def test_batch_keeps_order(self, client: TestClient) -> None:
        response = client.post("/", json=[
            {"jsonrpc": "2.0", "method": "tools/list", "id": 2},
            {"jsonrpc": "2.0", "method": "ping", "id": 1},
        ])
        assert [r["id"] for r in response.json()] == [2, 1]

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post("/", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        body = response.json()
        assert body["id"] is None
        assert body["error"]["code"] == -32700
        assert body["error"]["message"].startswith("Parse error:")

    def test_application_errors_stay_200(self, client: TestClient) -> None:
        response = client.post("/", json={"jsonrpc": "2.0", "method": "bogus", "id": 5})
        assert response.status_code == 200
        assert response.json()["error"] == {"code": -32603, "message": "Unknown method: bogus"}

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {
            "name": "wcag-mcp",
            "version": "2.0.0",
            "status": "healthy",
            "protocol": "MCP JSON-RPC 2.0",
            "tools": 20,
        }

    def test_preflight(self, client: TestClient) -> None:
        response = client.options("/")
        assert response.status_code == 204
        assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type, Accept, Mcp-Session-Id"


class TestComposedApp:
    @pytest.fixture
    def app_client(self, document: WcagDocument, clean_env: pytest.MonkeyPatch) -> TestClient:
        return TestClient(create_app(WcagSettings(), document))

    def test_bridge_key_from_environment(self, document: WcagDocument, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("BRIDGE_API_KEY", "s3cret")
        client = TestClient(create_app(WcagSettings(), document))
        assert client.post("/bridge/tools/list-principles", json={}).status_code == 401
        response = client.post(
            "/bridge/tools/list-principles", json={}, headers={"Authorization": "Bearer s3cret"},
        )
        assert response.status_code == 200

    def test_mcp_mount(self, app_client: TestClient) -> None:
        response = app_client.post("/mcp/", json={"jsonrpc": "2.0", "method": "ping", "id": 1})
        assert response.json() == {"jsonrpc": "2.0", "id": 1, "result": {}}

    def test_bridge_round_trips_through_mcp_adapter(self, app_client: TestClient) -> None:
        response = app_client.post("/bridge/tools/get-technique", json={"id": "H37"})
        assert response.status_code == 200
        assert response.json()["content"].startswith("# H37: Using alt attributes on img elements")

    def test_bridge_relays_validation_errors(self, app_client: TestClient) -> None:
        response = app_client.post("/bridge/tools/get-criterion", json={})
        assert response.status_code == 400
        assert "ref_id" in response.json()["error"]

    def test_openapi_lists_every_tool(self, app_client: TestClient) -> None:
        doc = app_client.get("/bridge/openapi.json").json()
        assert len(doc["paths"]) == 20
        assert doc["servers"] == [{"url": "http://testserver"}]

    def test_bare_mcp_path_answers_without_redirect(self, app_client: TestClient) -> None:
        response = app_client.post(
            "/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1}, follow_redirects=False,
        )
        assert response.status_code == 200
        assert response.json() == {"jsonrpc": "2.0", "id": 1, "result": {}}
        assert app_client.get("/mcp", follow_redirects=False).json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_backend_url_without_trailing_slash(
        self, document: WcagDocument, clean_env: pytest.MonkeyPatch,
    ) -> None:
        app = create_app(WcagSettings(), document)
        backend = McpBackend("http://testserver/mcp", transport=httpx.ASGITransport(app=app))
        try:
            text = await backend.call_tool("list-principles", {})
        finally:
            await backend.aclose()
        assert text.startswith("# WCAG 2.2 Principles")
