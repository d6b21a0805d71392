"""
Tests for the MCP protocol handler

Covers the handshake, tool discovery and invocation (including in-band
failures, cancellation and concurrency), resource reads, subscriptions,
logging level changes and strict handshake gating.
"""

import asyncio
import logging

import pytest
from pydantic import Field, field_validator

from bifrost_mcp_server.core import (
    InvalidParamsError,
    InvalidRequestError,
    NotInitializedError,
    Resource,
    ResourceNotFoundError,
    ResourceReadError,
    ResourceRegistry,
    Tool,
    ToolRegistry,
)
from bifrost_mcp_server.core.types import EmptyParams, MCPModel
from bifrost_mcp_server.handlers import ProtocolHandler, SessionState

from conftest import INIT_PARAMS


class FailingTool(Tool[EmptyParams]):
    name = "explode"
    description = "Always raises"
    params_model = EmptyParams

    async def execute(self, params, ctx):
        raise RuntimeError("kaboom")


class StrictTypeParams(MCPModel):
    x: int

    @field_validator("x")
    @classmethod
    def reject(cls, value):
        raise TypeError("bad type in validator")


class StrictTypeTool(Tool[StrictTypeParams]):
    name = "strict_type"
    description = "Parameter model raises a non-validation error"
    params_model = StrictTypeParams

    async def execute(self, params, ctx):
        return self.success("unreachable")


class CounterParams(MCPModel):
    rounds: int = Field(default=1, ge=1)


class CounterTool(Tool[CounterParams]):
    """Tool whose instance state is private to itself"""

    params_model = CounterParams
    description = "Counts its own calls"

    def __init__(self, name):
        self.name = name
        self.count = 0
        self._lock = asyncio.Lock()

    async def execute(self, params, ctx):
        for _ in range(params.rounds):
            await asyncio.sleep(0)
            async with self._lock:
                self.count += 1
        return self.json_result({"tool": self.name, "clientId": ctx.client_id})


class WaitForCancelTool(Tool[EmptyParams]):
    name = "wait_for_cancel"
    description = "Blocks until its call is cancelled"
    params_model = EmptyParams

    def __init__(self):
        self.started = asyncio.Event()

    async def execute(self, params, ctx):
        self.started.set()
        while True:
            ctx.cancellation.raise_if_cancelled()
            await asyncio.sleep(0.01)


class BrokenResource(Resource):
    uri = "app://broken"
    name = "Broken"
    description = "Raises while reading"

    async def read(self, params):
        raise RuntimeError("disk on fire")


class TestInitialize:
    """Handshake behaviour"""

    @pytest.mark.asyncio
    async def test_initialize_echoes_supported_version(self, handler):
        result = await handler.initialize(INIT_PARAMS)

        assert result.protocol_version == "2024-11-05"
        assert result.server_info.name == "Bifrost MCP Server"
        assert result.server_info.version == "2.0.0"
        assert result.capabilities.tools.list_changed is True
        assert result.capabilities.resources.list_changed is True
        assert handler.state is SessionState.READY

    @pytest.mark.asyncio
    async def test_initialize_wire_format_is_camel_case(self, handler):
        result = await handler.initialize(INIT_PARAMS)
        wire = result.model_dump(by_alias=True)

        assert wire["protocolVersion"] == "2024-11-05"
        assert wire["serverInfo"]["name"] == "Bifrost MCP Server"
        assert wire["capabilities"]["tools"]["listChanged"] is True

    @pytest.mark.asyncio
    async def test_initialize_unsupported_version_falls_back(self, handler):
        params = dict(INIT_PARAMS, protocolVersion="1999-01-01")
        result = await handler.initialize(params)
        assert result.protocol_version == "2024-11-05"

    @pytest.mark.asyncio
    async def test_initialize_newer_supported_version(self, handler):
        params = dict(INIT_PARAMS, protocolVersion="2025-06-18")
        result = await handler.initialize(params)
        assert result.protocol_version == "2025-06-18"

    @pytest.mark.asyncio
    async def test_initialize_missing_client_info(self, handler):
        with pytest.raises(InvalidRequestError):
            await handler.initialize({"protocolVersion": "2024-11-05"})
        assert handler.state is SessionState.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_initialize_without_params(self, handler):
        with pytest.raises(InvalidRequestError):
            await handler.initialize(None)

    def test_ping(self, handler):
        assert handler.ping() == {}


class TestTools:
    """tools/list and tools/call"""

    def test_list_tools_matches_registry(self, handler, tool_registry):
        result = handler.list_tools()
        assert len(result.tools) == len(tool_registry.get_all())

    def test_list_tools_schema_is_inlined(self, handler):
        tools = {t.name: t for t in handler.list_tools().tools}
        schema = tools["create_object"].input_schema

        assert schema["type"] == "object"
        assert "$defs" not in schema
        assert "primitiveType" in schema["properties"]
        assert schema["required"] == ["name"]

    @pytest.mark.asyncio
    async def test_unknown_tool_is_in_band_error(self, handler):
        result = await handler.call_tool({"name": "does_not_exist", "arguments": {}})

        assert result.is_error is True
        assert "Tool not found" in result.text
        assert "does_not_exist" in result.text

    @pytest.mark.asyncio
    async def test_invalid_arguments_are_in_band_error(self, handler):
        result = await handler.call_tool(
            {"name": "analyze_scene", "arguments": {"maxDepth": "deep"}}
        )
        assert result.is_error is True
        assert "Validation failed" in result.text

    @pytest.mark.asyncio
    async def test_missing_tool_name_is_protocol_error(self, handler):
        with pytest.raises(InvalidParamsError):
            await handler.call_tool({"arguments": {}})

    @pytest.mark.asyncio
    async def test_execution_fault_is_contained(self, handler, tool_registry, caplog):
        tool_registry.register(FailingTool())

        with caplog.at_level(logging.ERROR):
            result = await handler.call_tool({"name": "explode"})

        assert result.is_error is True
        assert "kaboom" in result.text
        assert any("kaboom" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_params_model_fault_is_contained(self, handler, tool_registry, caplog):
        tool_registry.register(StrictTypeTool())

        with caplog.at_level(logging.ERROR):
            result = await handler.call_tool({"name": "strict_type", "arguments": {"x": 1}})

        assert result.is_error is True
        assert "bad type in validator" in result.text
        assert any(r.exc_info for r in caplog.records)

    @pytest.mark.asyncio
    async def test_null_arguments_mean_no_arguments(self, handler):
        result = await handler.call_tool({"name": "analyze_scene", "arguments": None})

        assert result.is_error is False

    @pytest.mark.asyncio
    async def test_successful_call(self, handler):
        result = await handler.call_tool({"name": "analyze_scene", "arguments": {}})

        assert result.is_error is False
        assert result.content[0].mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_client_id_reaches_context(self, handler, tool_registry):
        tool_registry.register(CounterTool("counter"))
        result = await handler.call_tool(
            {"name": "counter", "arguments": {}}, client_id="agent-7"
        )
        assert '"clientId": "agent-7"' in result.text

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_share_state(self):
        alpha, beta = CounterTool("alpha"), CounterTool("beta")
        registry = ToolRegistry()
        registry.register(alpha)
        registry.register(beta)
        handler = ProtocolHandler(registry, ResourceRegistry())

        calls = []
        for i in range(40):
            tool = "alpha" if i % 2 == 0 else "beta"
            rounds = 3 if tool == "alpha" else 5
            calls.append(
                handler.call_tool(
                    {"name": tool, "arguments": {"rounds": rounds}}, request_id=i
                )
            )
        results = await asyncio.gather(*calls)

        assert all(not r.is_error for r in results)
        assert alpha.count == 20 * 3
        assert beta.count == 20 * 5
        assert len(handler.request_manager) == 0

    @pytest.mark.asyncio
    async def test_cancel_in_flight_call(self, handler, tool_registry):
        tool = WaitForCancelTool()
        tool_registry.register(tool)

        call = asyncio.create_task(
            handler.call_tool({"name": "wait_for_cancel"}, request_id="req-1")
        )
        await asyncio.wait_for(tool.started.wait(), timeout=1)
        await handler.cancel("req-1", "user aborted")
        result = await asyncio.wait_for(call, timeout=1)

        assert result.is_error is True
        assert "user aborted" in result.text
        assert len(handler.request_manager) == 0

    @pytest.mark.asyncio
    async def test_cancel_unknown_request_is_ignored(self, handler):
        assert await handler.cancel("nope") == {}


class TestResources:
    """resources/list and resources/read"""

    def test_list_resources(self, handler, resource_registry):
        result = handler.list_resources()
        assert len(result.resources) == len(resource_registry.get_all())

    @pytest.mark.asyncio
    async def test_unknown_uri_raises_not_found(self, handler):
        with pytest.raises(ResourceNotFoundError) as excinfo:
            await handler.read_resource({"uri": "app://invalid/resource"})

        assert isinstance(excinfo.value, ValueError)
        assert excinfo.value.code == -32602
        assert "app://invalid/resource" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_read_returns_json(self, handler):
        result = await handler.read_resource({"uri": "app://scene/hierarchy"})

        assert result.mime_type == "application/json"
        assert result.payload["sceneName"] == "SampleScene"

    @pytest.mark.asyncio
    async def test_raw_uri_with_query_reaches_resource(self, handler):
        uri = "app://assets/list?type=Material"
        result = await handler.read_resource({"uri": uri})

        assert result.contents[0].uri == uri
        assert result.payload["filterType"] == "Material"

    @pytest.mark.asyncio
    async def test_read_fault_becomes_read_error(self, handler, resource_registry):
        resource_registry.register(BrokenResource())

        with pytest.raises(ResourceReadError) as excinfo:
            await handler.read_resource({"uri": "app://broken"})

        assert excinfo.value.code == -32603
        assert "disk on fire" in excinfo.value.message

    @pytest.mark.asyncio
    async def test_read_without_uri(self, handler):
        with pytest.raises(InvalidParamsError):
            await handler.read_resource({})


class TestNotifications:
    """list_changed fan-out and resource subscriptions"""

    def test_tool_registration_emits_list_changed(self, handler, tool_registry):
        received = []
        handler.add_notification_listener(received.append)

        tool_registry.register(FailingTool())

        assert [n.method for n in received] == ["notifications/tools/list_changed"]

    def test_resource_registration_emits_list_changed(self, handler, resource_registry):
        received = []
        handler.add_notification_listener(received.append)

        resource_registry.unregister("app://selection")

        assert [n.method for n in received] == ["notifications/resources/list_changed"]

    def test_closed_handler_stops_listening(self, handler, tool_registry):
        received = []
        handler.add_notification_listener(received.append)
        handler.close()

        tool_registry.register(FailingTool())
        assert received == []

    def test_subscribe_and_update(self, handler):
        received = []
        handler.add_notification_listener(received.append)

        assert handler.subscribe({"uri": "app://selection"}) == {}
        handler.notify_resource_updated("app://selection")

        assert len(received) == 1
        assert received[0].method == "notifications/resources/updated"
        assert received[0].params == {"uri": "app://selection"}

    def test_unsubscribe_stops_updates(self, handler):
        received = []
        handler.add_notification_listener(received.append)

        handler.subscribe({"uri": "app://selection"})
        handler.unsubscribe({"uri": "app://selection"})
        handler.notify_resource_updated("app://selection")

        assert received == []

    def test_subscribe_unknown_uri(self, handler):
        with pytest.raises(ResourceNotFoundError):
            handler.subscribe({"uri": "app://nowhere"})


class TestLoggingLevel:
    """logging/setLevel"""

    def test_set_level(self, handler):
        root = logging.getLogger()
        previous = root.level
        try:
            assert handler.set_level("warning") == {}
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)

    def test_unknown_level(self, handler):
        with pytest.raises(InvalidParamsError):
            handler.set_level("chatty")


class TestStrictHandshake:
    """Gating before initialize when strict mode is on"""

    @pytest.mark.asyncio
    async def test_requests_rejected_before_initialize(self, tool_registry, resource_registry):
        handler = ProtocolHandler(tool_registry, resource_registry, strict_handshake=True)

        with pytest.raises(NotInitializedError) as excinfo:
            handler.list_tools()
        assert excinfo.value.code == -32002

        with pytest.raises(NotInitializedError):
            await handler.call_tool({"name": "analyze_scene"})
        with pytest.raises(NotInitializedError):
            await handler.read_resource({"uri": "app://selection"})
        with pytest.raises(NotInitializedError):
            handler.set_level("debug")

        assert handler.ping() == {}

        await handler.initialize(INIT_PARAMS)
        assert len(handler.list_tools().tools) == len(tool_registry)

    def test_lenient_by_default(self, handler):
        assert handler.state is SessionState.UNINITIALIZED
        assert handler.list_tools().tools
