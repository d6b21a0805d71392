"""
MCP Request Handlers

Organized handlers for all MCP protocol methods.
"""

from .protocol_handler import (
    DEFAULT_PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    ProtocolHandler,
    SessionState,
)

__all__ = [
    "ProtocolHandler",
    "SessionState",
    "SERVER_NAME",
    "SERVER_VERSION",
    "DEFAULT_PROTOCOL_VERSION",
    "SUPPORTED_PROTOCOL_VERSIONS",
]
