"""
Tests for the HTTP transport

Drives the FastAPI app with TestClient: JSON-RPC routing, error mapping,
notifications and the informational endpoints.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from bifrost_mcp_server.host import InMemoryHost
from bifrost_mcp_server.server import create_app

from conftest import INIT_PARAMS


def rpc(client, method, params=None, request_id=1, headers=None):
    body = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body, headers=headers or {})


@pytest.fixture
def client():
    app = create_app(host=InMemoryHost(), load_plugins=False, capture_logs=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def strict_client():
    app = create_app(
        host=InMemoryHost(), strict_handshake=True, load_plugins=False, capture_logs=False
    )
    with TestClient(app) as test_client:
        yield test_client


class TestJsonRpc:
    """JSON-RPC routing over POST /mcp"""

    def test_initialize(self, client):
        response = rpc(client, "initialize", INIT_PARAMS)
        body = response.json()

        assert response.status_code == 200
        assert body["jsonrpc"] == "2.0"
        assert body["id"] == 1
        assert body["result"]["protocolVersion"] == "2024-11-05"
        assert body["result"]["serverInfo"] == {"name": "Bifrost MCP Server", "version": "2.0.0"}
        assert body["result"]["capabilities"]["resources"]["listChanged"] is True

    def test_malformed_initialize(self, client):
        body = rpc(client, "initialize", {"protocolVersion": "2024-11-05"}).json()
        assert body["error"]["code"] == -32600

    def test_tools_list(self, client):
        body = rpc(client, "tools/list").json()
        names = [tool["name"] for tool in body["result"]["tools"]]

        assert "create_scene" in names
        assert all("inputSchema" in tool for tool in body["result"]["tools"])

    def test_tools_call(self, client):
        body = rpc(
            client,
            "tools/call",
            {"name": "create_object", "arguments": {"name": "Crate", "primitiveType": "Cube"}},
        ).json()

        assert body["result"]["isError"] is False
        assert body["result"]["content"][0]["type"] == "text"
        assert "Crate" in body["result"]["content"][0]["text"]

    def test_unknown_tool_is_result_not_error(self, client):
        body = rpc(client, "tools/call", {"name": "nope", "arguments": {}}).json()

        assert "error" not in body
        assert body["result"]["isError"] is True
        assert body["result"]["content"][0]["text"] == "Tool not found: nope"

    def test_resources_read(self, client):
        body = rpc(client, "resources/read", {"uri": "app://selection"}).json()
        contents = body["result"]["contents"][0]

        assert contents["uri"] == "app://selection"
        assert contents["mimeType"] == "application/json"

    def test_unknown_resource(self, client):
        body = rpc(client, "resources/read", {"uri": "app://invalid/resource"}).json()

        assert body["error"]["code"] == -32602
        assert body["error"]["data"] == {"uri": "app://invalid/resource"}

    def test_resources_list(self, client):
        body = rpc(client, "resources/list").json()
        uris = {r["uri"] for r in body["result"]["resources"]}
        assert {
            "app://scene/hierarchy",
            "app://project/structure",
            "app://selection",
            "app://console/logs",
            "app://build/settings",
            "app://assets/list",
        } <= uris

    def test_subscribe(self, client):
        assert rpc(client, "resources/subscribe", {"uri": "app://selection"}).json()["result"] == {}
        assert rpc(client, "resources/subscribe", {"uri": "app://x"}).json()["error"]["code"] == -32602

    def test_ping(self, client):
        assert rpc(client, "ping").json()["result"] == {}

    def test_unknown_method(self, client):
        body = rpc(client, "prompts/list").json()
        assert body["error"]["code"] == -32601

    def test_parse_error(self, client):
        response = client.post(
            "/mcp", content=b"{not json", headers={"content-type": "application/json"}
        )
        body = response.json()
        assert body["error"]["code"] == -32700
        assert body["id"] is None

    def test_undecodable_body_is_parse_error(self, client):
        response = client.post(
            "/mcp", content=b"{\"id\": \"\xff\"}", headers={"content-type": "application/json"}
        )
        body = response.json()
        assert body["error"]["code"] == -32700
        assert body["error"]["message"] == "Parse error"

    def test_null_arguments(self, client):
        body = rpc(client, "tools/call", {"name": "find_objects", "arguments": None}).json()
        assert body["result"]["isError"] is False

    def test_invalid_envelope(self, client):
        body = client.post("/mcp", json={"jsonrpc": "2.0", "id": 4}).json()
        assert body["error"]["code"] == -32600
        assert body["id"] == 4

    def test_notifications_accepted(self, client):
        assert rpc(client, "notifications/initialized", request_id=None).status_code == 202
        response = rpc(
            client, "notifications/cancelled", {"requestId": "42", "reason": "late"}, request_id=None
        )
        assert response.status_code == 202

    def test_set_level(self, client):
        previous = logging.getLogger().level
        assert rpc(client, "logging/setLevel", {"level": "debug"}).json()["result"] == {}
        assert rpc(client, "logging/setLevel", {"level": "loud"}).json()["error"]["code"] == -32602
        logging.getLogger().setLevel(previous)

    def test_client_id_header(self, client):
        body = rpc(
            client,
            "tools/call",
            {"name": "find_objects", "arguments": {}},
            headers={"X-Client-Id": "agent-42"},
        ).json()
        assert body["result"]["isError"] is False


class TestConsoleCapture:
    def test_server_logs_reach_console_resource(self, caplog):
        caplog.set_level(logging.INFO)
        app = create_app(host=InMemoryHost(), load_plugins=False, capture_logs=True)
        with TestClient(app) as client:
            rpc(client, "tools/call", {"name": "create_scene", "arguments": {"name": "Arena"}})
            body = rpc(client, "resources/read", {"uri": "app://console/logs"}).json()

        payload = body["result"]["contents"][0]["text"]
        assert "Created scene 'Arena'" in payload
        assert not app.state.log_buffer.attached

    def test_startup_failure_detaches_buffer(self, monkeypatch):
        def broken_plugins(*args):
            raise RuntimeError("plugin discovery failed")

        monkeypatch.setattr("bifrost_mcp_server.server.register_plugins", broken_plugins)
        root = logging.getLogger()
        handlers_before = list(root.handlers)

        app = create_app(host=InMemoryHost(), load_plugins=True, capture_logs=True)
        with pytest.raises(Exception):
            with TestClient(app):
                pass

        assert not app.state.log_buffer.attached
        assert root.handlers == handlers_before


class TestStrictHandshake:
    def test_rejects_before_initialize(self, strict_client):
        body = rpc(strict_client, "tools/list").json()
        assert body["error"]["code"] == -32002
        body = rpc(strict_client, "logging/setLevel", {"level": "debug"}).json()
        assert body["error"]["code"] == -32002

        rpc(strict_client, "initialize", INIT_PARAMS)
        body = rpc(strict_client, "tools/list", request_id=2).json()
        assert "result" in body


class TestInfoEndpoints:
    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"

    def test_root(self, client):
        body = client.get("/").json()
        assert body["name"] == "Bifrost MCP Server"
        assert body["mcp_endpoint"] == "/mcp"
