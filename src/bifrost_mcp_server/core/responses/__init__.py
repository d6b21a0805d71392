"""
MCP Response Classes

Organized response factories for different MCP protocol domains.
"""

from ..errors import ErrorCodes
from ..responses.base import Response
from ..responses.notification import NotificationResponse
from ..responses.resource import ResourceResponse
from ..responses.tool import ToolResponse

__all__ = [
    "Response",
    "ErrorCodes",
    "ToolResponse",
    "ResourceResponse",
    "NotificationResponse",
]
