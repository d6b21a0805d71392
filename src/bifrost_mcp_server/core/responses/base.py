"""
JSON-RPC reply envelopes.

`Response.for_exception` is the one place that decides which JSON-RPC error
a failure raised while serving a request becomes.
"""

import json
from typing import Any, Optional

from ..errors import ErrorCodes, MCPError
from ..types.mcp import JSONRPCError, JSONRPCResponse, RequestId

# Request bodies that cannot be decoded at all
PARSE_ERRORS = (json.JSONDecodeError, UnicodeDecodeError)


class Response:
    """Factories for JSON-RPC 2.0 replies"""

    @staticmethod
    def success(id: Optional[RequestId], result: Any) -> JSONRPCResponse:
        return JSONRPCResponse(id=id, result=result)

    @staticmethod
    def error(
        id: Optional[RequestId], code: int, message: str, data: Optional[Any] = None
    ) -> JSONRPCResponse:
        return JSONRPCResponse(
            id=id, error=JSONRPCError(code=code, message=message, data=data)
        )

    @classmethod
    def for_exception(
        cls, id: Optional[RequestId], exc: BaseException
    ) -> JSONRPCResponse:
        """Map a request failure onto a JSON-RPC error reply

        - Undecodable body (bad JSON or bad UTF-8): Parse error with a null id,
          since the request id could not be read
        - MCPError subclasses: their own code, message and data
        - Anything else: Internal error carrying the exception text

        Args:
            id: Id of the failed request, if it was parsed
            exc: The exception raised while serving it

        Returns:
            JSONRPCResponse object with error
        """
        if isinstance(exc, PARSE_ERRORS):
            return cls.error(None, ErrorCodes.PARSE_ERROR, "Parse error")
        if isinstance(exc, MCPError):
            return cls.error(id, exc.code, exc.message, exc.data)
        return cls.error(id, ErrorCodes.INTERNAL_ERROR, str(exc) or type(exc).__name__)
