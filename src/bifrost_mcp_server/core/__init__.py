"""
MCP Server Framework - Core Module

This package provides the foundation for building MCP capabilities:
- Tool base class and ToolRegistry
- Resource base class and ResourceRegistry
- ExecutionContext and cancellation for tool calls
- Type-safe request/response models
- LogBuffer feeding the console-log resource
- Plugin discovery through entry points

Example:
    ```python
    from pydantic import Field

    from bifrost_mcp_server.core import ExecutionContext, Tool
    from bifrost_mcp_server.core.types import MCPModel

    class GreetParams(MCPModel):
        name: str = Field(description="Who to greet")

    class GreetTool(Tool[GreetParams]):
        name = "greet"
        description = "Say hello"
        params_model = GreetParams

        async def execute(self, params: GreetParams, ctx: ExecutionContext):
            return self.success(f"Hello {params.name}!")
    ```
"""

# Base classes
from .base import Tool
from .context import (
    CancellationToken,
    ExecutionContext,
    ServerContext,
    ToolCancelledError,
)

# Errors
from .errors import (
    InvalidParamsError,
    InvalidRequestError,
    MCPError,
    MethodNotFoundError,
    NotInitializedError,
    ResourceNotFoundError,
    ResourceReadError,
)

# Log capture
from .log_buffer import LogBuffer, LogBufferHandler, LogEntry

# Registries
from .registry import ToolRegistry
from .resources import Resource, ResourceRegistry

# Request management
from .request_manager import RequestManager

# MCP Protocol Responses (factories)
from .responses import (
    ErrorCodes,
    NotificationResponse,
    ResourceResponse,
    Response,
    ToolResponse,
)

# Type definitions
from .types import MCPModel

__all__ = [
    # Base
    "Tool",
    "Resource",
    "ExecutionContext",
    "ServerContext",
    "CancellationToken",
    "ToolCancelledError",
    "MCPModel",
    # Registries
    "ToolRegistry",
    "ResourceRegistry",
    # Request management
    "RequestManager",
    # Logs
    "LogBuffer",
    "LogBufferHandler",
    "LogEntry",
    # Errors
    "MCPError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "InvalidParamsError",
    "ResourceNotFoundError",
    "ResourceReadError",
    "NotInitializedError",
    # MCP Responses
    "Response",
    "ErrorCodes",
    "ToolResponse",
    "ResourceResponse",
    "NotificationResponse",
]
