"""Type definitions for the MCP server framework"""

from .mcp import (
    DEFAULT_MIME_TYPE,
    CallToolParams,
    Capabilities,
    ClientInfo,
    InitializeParams,
    InitializeResult,
    JSONRPCError,
    JSONRPCNotification,
    JSONRPCRequest,
    JSONRPCResponse,
    ListResourcesResult,
    ListToolsResult,
    ReadResourceParams,
    RequestId,
    ResourceContents,
    ResourceDescriptor,
    ResourceReadResult,
    ResourcesCapability,
    ServerInfo,
    TextContent,
    ToolCallResult,
    ToolDescriptor,
    ToolsCapability,
)
from .models import EmptyParams, MCPModel, TParams

__all__ = [
    # From models
    "MCPModel",
    "EmptyParams",
    "TParams",
    # From mcp
    "DEFAULT_MIME_TYPE",
    "RequestId",
    "TextContent",
    "ToolDescriptor",
    "ToolCallResult",
    "ListToolsResult",
    "CallToolParams",
    "ResourceDescriptor",
    "ResourceContents",
    "ResourceReadResult",
    "ListResourcesResult",
    "ReadResourceParams",
    "ClientInfo",
    "ServerInfo",
    "ToolsCapability",
    "ResourcesCapability",
    "Capabilities",
    "InitializeParams",
    "InitializeResult",
    "JSONRPCError",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCNotification",
]
