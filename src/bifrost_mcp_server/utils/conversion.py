"""
Wire conversion helpers for the MCP server
"""

from typing import Any

from pydantic import BaseModel

# =============================================================================
# Case Conversion
# =============================================================================


def snake_to_camel(snake_str: str) -> str:
    """Convert snake_case to camelCase

    A leading underscore is preserved so `_meta` stays `_meta`.

    Args:
        snake_str: String in snake_case format

    Returns:
        String in camelCase format
    """
    if snake_str.startswith("_"):
        return "_" + snake_to_camel(snake_str[1:])

    head, *rest = snake_str.split("_")
    return head + "".join(word.capitalize() for word in rest)


# =============================================================================
# Serialization
# =============================================================================


def to_wire(obj: Any) -> Any:
    """Convert a result object into JSON-ready data with camelCase keys

    Pydantic models are dumped by alias with null fields dropped. Lists and
    dicts are walked so that models nested in plain containers are converted
    too. Anything else is returned untouched.

    Args:
        obj: Model, container or primitive

    Returns:
        JSON-serializable structure
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(obj, dict):
        return {key: to_wire(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_wire(item) for item in obj]
    return obj
