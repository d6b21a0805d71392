"""Utility functions for the Bifrost MCP Server"""

from .conversion import snake_to_camel, to_wire

__all__ = [
    "snake_to_camel",
    "to_wire",
]
