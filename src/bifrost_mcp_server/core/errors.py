"""
Request-level error types.

These surface to the transport as JSON-RPC errors. Business failures of a
tool call never use them; those travel in-band as a ToolCallResult with
isError set.
"""

from typing import Any, Optional


class ErrorCodes:
    """JSON-RPC error codes used by this server"""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Strict handshake: request arrived before initialize
    NOT_INITIALIZED = -32002


class MCPError(Exception):
    """Base exception for errors reported as a JSON-RPC error object"""

    code: int = ErrorCodes.INTERNAL_ERROR

    def __init__(self, message: str, data: Optional[Any] = None):
        self.message = message
        self.data = data
        super().__init__(message)


class InvalidRequestError(MCPError):
    """Raised when a request is structurally malformed"""

    code = ErrorCodes.INVALID_REQUEST


class MethodNotFoundError(MCPError):
    """Raised for a method the server does not implement"""

    code = ErrorCodes.METHOD_NOT_FOUND


class InvalidParamsError(MCPError, ValueError):
    """Raised when request parameters name something invalid"""

    code = ErrorCodes.INVALID_PARAMS


class ResourceNotFoundError(InvalidParamsError):
    """Raised when a resource URI is not registered"""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Resource not found: {uri}", data={"uri": uri})


class ResourceReadError(MCPError):
    """Raised when a registered resource fails while reading"""

    code = ErrorCodes.INTERNAL_ERROR


class NotInitializedError(MCPError):
    """Raised by strict handshake gating before initialize succeeded"""

    code = ErrorCodes.NOT_INITIALIZED
