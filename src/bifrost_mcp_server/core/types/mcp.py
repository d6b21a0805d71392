"""
MCP Protocol Type Definitions

Wire types for the five core operations (initialize, tools/list, tools/call,
resources/list, resources/read) plus the JSON-RPC 2.0 envelope.

Based on MCP Specification 2024-11-05
https://modelcontextprotocol.io/specification/2024-11-05/schema
"""

import json
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field, field_validator

from .models import MCPModel

# =============================================================================
# Base Types
# =============================================================================

RequestId = Union[str, int, None]

DEFAULT_MIME_TYPE = "application/json"


# =============================================================================
# Content Types
# =============================================================================


class TextContent(MCPModel):
    """Text content block"""

    type: Literal["text"] = "text"
    text: str
    mime_type: Optional[str] = None


# =============================================================================
# Tool Types
# =============================================================================


class ToolDescriptor(MCPModel):
    """Tool definition as advertised by tools/list"""

    name: str
    description: str
    input_schema: Dict[str, Any]


class ToolCallResult(MCPModel):
    """
    Result of a tool call.

    When `is_error` is true the first content block carries a human-readable
    diagnostic. Success results usually carry JSON serialized as text.
    """

    content: List[TextContent] = Field(min_length=1)
    is_error: bool = False

    @property
    def text(self) -> str:
        """Text of the first content block"""
        return self.content[0].text


class ListToolsResult(MCPModel):
    """Result of tools/list request"""

    tools: List[ToolDescriptor]


class CallToolParams(MCPModel):
    """Parameters of a tools/call request"""

    name: str
    arguments: Optional[Dict[str, Any]] = Field(default_factory=dict)

    @field_validator("arguments", mode="before")
    @classmethod
    def null_means_empty(cls, value):
        return {} if value is None else value


# =============================================================================
# Resource Types
# =============================================================================


class ResourceDescriptor(MCPModel):
    """Resource definition as advertised by resources/list"""

    uri: str
    name: str
    description: Optional[str] = None
    mime_type: str = DEFAULT_MIME_TYPE


class ResourceContents(MCPModel):
    """Text resource contents"""

    uri: str
    mime_type: str = DEFAULT_MIME_TYPE
    text: str


class ResourceReadResult(MCPModel):
    """Result of resources/read request"""

    contents: List[ResourceContents] = Field(min_length=1)

    @property
    def mime_type(self) -> str:
        return self.contents[0].mime_type

    @property
    def text(self) -> str:
        return self.contents[0].text

    @property
    def payload(self) -> Any:
        """
        Parsed payload of the first contents block.

        JSON documents are decoded; any other MIME type yields the raw text.
        """
        if self.mime_type == "application/json":
            return json.loads(self.text)
        return self.text


class ListResourcesResult(MCPModel):
    """Result of resources/list request"""

    resources: List[ResourceDescriptor]


class ReadResourceParams(MCPModel):
    """
    Parameters of a resources/read request.

    `uri` is the raw requested URI and may carry a query-style suffix
    (`app://assets/list?type=Material`).
    """

    uri: str


# =============================================================================
# Lifecycle Types
# =============================================================================


class ClientInfo(MCPModel):
    """Client identity sent with initialize"""

    name: str
    version: str


class ServerInfo(MCPModel):
    """Server identity returned by initialize"""

    name: str
    version: str


class ToolsCapability(MCPModel):
    list_changed: bool = True


class ResourcesCapability(MCPModel):
    subscribe: bool = False
    list_changed: bool = True


class Capabilities(MCPModel):
    """Capabilities advertised during the handshake"""

    tools: ToolsCapability = Field(default_factory=ToolsCapability)
    resources: ResourcesCapability = Field(default_factory=ResourcesCapability)
    logging: Dict[str, Any] = Field(default_factory=dict)


class InitializeParams(MCPModel):
    """Parameters of an initialize request"""

    protocol_version: str
    client_info: ClientInfo
    capabilities: Dict[str, Any] = Field(default_factory=dict)


class InitializeResult(MCPModel):
    """Result of an initialize request"""

    protocol_version: str
    server_info: ServerInfo
    capabilities: Capabilities


# =============================================================================
# JSON-RPC Types
# =============================================================================


class JSONRPCError(MCPModel):
    """JSON-RPC error object"""

    code: int
    message: str
    data: Optional[Any] = None


class JSONRPCRequest(MCPModel):
    """JSON-RPC request"""

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId = None
    method: str
    params: Optional[Dict[str, Any]] = None


class JSONRPCResponse(MCPModel):
    """JSON-RPC response"""

    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId = None
    result: Optional[Any] = None
    error: Optional[JSONRPCError] = None


class JSONRPCNotification(MCPModel):
    """JSON-RPC notification (no response expected)"""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: Optional[Dict[str, Any]] = None
