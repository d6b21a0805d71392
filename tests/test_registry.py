"""
Unit tests for the tool and resource registries

Tests:
- Register/lookup identity and last-write-wins overwrites
- Unregister and absent-name no-ops
- Change listeners, including failing listeners
- Thread-safe concurrent registration
"""

import threading

from pydantic import Field

from bifrost_mcp_server.core import Resource, ResourceRegistry, Tool, ToolRegistry
from bifrost_mcp_server.core.types import MCPModel


class EchoParams(MCPModel):
    message: str = Field(description="Message to echo")


class EchoTool(Tool[EchoParams]):
    name = "echo"
    description = "Echo a message back"
    params_model = EchoParams

    async def execute(self, params, ctx):
        return self.success(params.message)


class LoudEchoTool(EchoTool):
    description = "Echo a message back in upper case"

    async def execute(self, params, ctx):
        return self.success(params.message.upper())


class StaticResource(Resource):
    uri = "app://static/info"
    name = "Static Info"
    description = "Fixed document"

    async def read(self, params):
        return self.json_result(params, {"ok": True})


class TestToolRegistry:
    """Test ToolRegistry behaviour"""

    def test_register_and_get_returns_same_instance(self):
        registry = ToolRegistry()
        tool = EchoTool()
        registry.register(tool)

        assert registry.has("echo")
        assert "echo" in registry
        assert registry.get("echo") is tool
        assert len(registry) == 1

    def test_get_unknown_returns_none(self):
        registry = ToolRegistry()
        assert registry.get("missing") is None
        assert not registry.has("missing")

    def test_register_same_name_overwrites(self):
        registry = ToolRegistry()
        first, second = EchoTool(), LoudEchoTool()
        registry.register(first)
        registry.register(second)

        assert registry.get("echo") is second
        assert len(registry) == 1

    def test_unregister(self):
        registry = ToolRegistry()
        registry.register(EchoTool())
        registry.unregister("echo")

        assert not registry.has("echo")
        assert registry.get_all() == []

    def test_unregister_absent_is_noop(self):
        registry = ToolRegistry()
        registry.register(EchoTool())
        registry.unregister("never-registered")
        assert len(registry) == 1

    def test_get_all_keeps_registration_order(self, host):
        from bifrost_mcp_server.tools import BUILTIN_TOOLS, create_builtin_tools

        registry = ToolRegistry()
        for tool in create_builtin_tools(host):
            registry.register(tool)

        assert [t.name for t in registry.get_all()] == [cls.name for cls in BUILTIN_TOOLS]

    def test_mcp_tools_list_matches_registry(self, tool_registry):
        result = tool_registry.get_mcp_tools_list()
        assert len(result.tools) == len(tool_registry.get_all())

    def test_listeners_called_on_change(self):
        registry = ToolRegistry()
        calls = []
        registry.add_listener(lambda: calls.append("changed"))

        registry.register(EchoTool())
        registry.unregister("echo")
        registry.unregister("echo")

        assert calls == ["changed", "changed"]

    def test_failing_listener_does_not_break_registration(self):
        registry = ToolRegistry()
        calls = []

        def broken():
            raise RuntimeError("listener exploded")

        registry.add_listener(broken)
        registry.add_listener(lambda: calls.append(1))
        registry.register(EchoTool())

        assert registry.has("echo")
        assert calls == [1]

    def test_removed_listener_not_called(self):
        registry = ToolRegistry()
        calls = []
        listener = lambda: calls.append(1)  # noqa: E731
        registry.add_listener(listener)
        registry.remove_listener(listener)
        registry.register(EchoTool())
        assert calls == []

    def test_concurrent_registration(self):
        registry = ToolRegistry()

        def make_tool(index):
            return type(
                f"Tool{index}",
                (EchoTool,),
                {"name": f"tool_{index}"},
            )()

        threads = [
            threading.Thread(target=registry.register, args=(make_tool(i),))
            for i in range(50)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 50
        assert all(registry.has(f"tool_{i}") for i in range(50))


class TestResourceRegistry:
    """Test ResourceRegistry behaviour"""

    def test_register_and_get(self):
        registry = ResourceRegistry()
        resource = StaticResource()
        registry.register(resource)

        assert registry.get("app://static/info") is resource
        assert "app://static/info" in registry

    def test_unregister(self):
        registry = ResourceRegistry()
        registry.register(StaticResource())
        registry.unregister("app://static/info")
        registry.unregister("app://static/info")

        assert registry.get("app://static/info") is None
        assert len(registry) == 0

    def test_overwrite_by_uri(self):
        registry = ResourceRegistry()
        first, second = StaticResource(), StaticResource()
        registry.register(first)
        registry.register(second)

        assert registry.get("app://static/info") is second
        assert len(registry) == 1

    def test_resolve_strips_query_suffix(self):
        registry = ResourceRegistry()
        resource = StaticResource()
        registry.register(resource)

        assert registry.resolve("app://static/info?verbose=1") is resource
        assert registry.resolve("app://static/other") is None

    def test_resolve_falls_back_to_raw_uri(self):
        class QueryKeyed(StaticResource):
            uri = "app://static/info?variant=b"

        registry = ResourceRegistry()
        keyed = QueryKeyed()
        registry.register(keyed)

        assert registry.resolve("app://static/info?variant=b") is keyed

    def test_mcp_resources_list(self, resource_registry):
        result = resource_registry.get_mcp_resources_list()
        uris = [r.uri for r in result.resources]

        assert len(uris) == len(resource_registry.get_all())
        assert "app://scene/hierarchy" in uris
        assert all(r.mime_type == "application/json" for r in result.resources)

    def test_listener_called_on_register(self):
        registry = ResourceRegistry()
        calls = []
        registry.add_listener(lambda: calls.append(1))
        registry.register(StaticResource())
        registry.clear()
        assert calls == [1, 1]
