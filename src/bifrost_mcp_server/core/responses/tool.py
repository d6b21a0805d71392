"""
Tool Result Factories

Builders for the ToolCallResult envelope.
"""

import json
from typing import Any

from ..types.mcp import TextContent, ToolCallResult


class ToolResponse:
    """Factory for tool call results

    Tool execution errors are results, not protocol errors: they come back as
    a successful response whose result has isError=true so the caller can see
    the diagnostic and self-correct.

    Examples:

    # Plain text
    ToolResponse.text_result("Scene saved")

    # Structured data serialized as JSON text
    ToolResponse.json_result({"rootCount": 3})

    # Business failure
    ToolResponse.error("Target object is required")
    """

    @staticmethod
    def text_result(text: str) -> ToolCallResult:
        """Create a successful single text block result

        Args:
            text: Text content to return

        Returns:
            ToolCallResult with isError=false
        """
        return ToolCallResult(content=[TextContent(text=text)], is_error=False)

    @staticmethod
    def json_result(data: Any) -> ToolCallResult:
        """Create a successful result carrying JSON serialized as text

        Args:
            data: JSON-serializable data

        Returns:
            ToolCallResult whose text block holds indented JSON
        """
        text = json.dumps(data, indent=2, default=str)
        return ToolCallResult(
            content=[TextContent(text=text, mime_type="application/json")],
            is_error=False,
        )

    @staticmethod
    def error(message: str) -> ToolCallResult:
        """Create an error result

        Args:
            message: Human-readable diagnostic

        Returns:
            ToolCallResult with isError=true
        """
        return ToolCallResult(content=[TextContent(text=message)], is_error=True)

    @staticmethod
    def not_found(name: str) -> ToolCallResult:
        """Result for a tools/call naming an unregistered tool"""
        return ToolResponse.error(f"Tool not found: {name}")

    @staticmethod
    def execution_error(name: str, exc: BaseException) -> ToolCallResult:
        """Result for a fault raised inside a tool's execute()"""
        return ToolResponse.error(f"Tool '{name}' failed: {exc}")
