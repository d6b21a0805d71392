"""
Core model definitions for the MCP server framework.

This module defines the base types tools and wire models build on:
- MCPModel: pydantic base with camelCase aliases
- TParams: type variable for tool parameter models
- EmptyParams: parameter model for tools that take no arguments
"""

from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from bifrost_mcp_server.utils.conversion import snake_to_camel


class MCPModel(BaseModel):
    """
    Base model for all MCP wire types and tool parameters.

    Field names are exposed in camelCase for JSON schema and serialization,
    which is what the MCP protocol expects on the wire.

    Example:
        ```python
        class MoveParams(MCPModel):
            target_path: str  # JSON: targetPath
            snap_to_grid: bool = False  # JSON: snapToGrid
        ```
    """

    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase on input
    )


# Type variable for generic tool definitions
TParams = TypeVar("TParams", bound=BaseModel)


class EmptyParams(MCPModel):
    """Parameters for tools that accept no arguments"""
