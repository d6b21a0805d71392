"""Shared fixtures: an in-memory host wired into registries and a handler"""

import logging

import pytest

from bifrost_mcp_server.core import LogBuffer, ResourceRegistry, ToolRegistry
from bifrost_mcp_server.handlers import ProtocolHandler
from bifrost_mcp_server.host import InMemoryHost
from bifrost_mcp_server.resources import create_builtin_resources
from bifrost_mcp_server.tools import create_builtin_tools

INIT_PARAMS = {
    "protocolVersion": "2024-11-05",
    "clientInfo": {"name": "test-client", "version": "1.0.0"},
    "capabilities": {},
}


@pytest.fixture
def host():
    return InMemoryHost(project_name="Test Project", app_version="6000.0.1")


@pytest.fixture
def log_buffer():
    buffer = LogBuffer(capacity=1000)
    yield buffer
    buffer.detach()


@pytest.fixture
def tool_registry(host):
    registry = ToolRegistry()
    for tool in create_builtin_tools(host):
        registry.register(tool)
    return registry


@pytest.fixture
def resource_registry(host, log_buffer):
    registry = ResourceRegistry()
    for resource in create_builtin_resources(host, log_buffer):
        registry.register(resource)
    return registry


@pytest.fixture
def handler(tool_registry, resource_registry, host):
    protocol_handler = ProtocolHandler(tool_registry, resource_registry, host=host)
    yield protocol_handler
    protocol_handler.close()


@pytest.fixture
def capture_logger():
    """Isolated logger so tests never feed the root logger's handlers"""
    test_logger = logging.getLogger("bifrost.tests.capture")
    test_logger.setLevel(logging.DEBUG)
    test_logger.propagate = False
    return test_logger
