"""
Plugin discovery.

Installed packages contribute capabilities through entry points:

    [project.entry-points."bifrost_mcp_server.tools"]
    my_tools = "my_package.tools:create_tools"

Each entry point resolves to a callable taking the host application and
returning one Tool/Resource or an iterable of them.
"""

import logging
from importlib.metadata import entry_points
from typing import Any, Iterable, List, Type, TypeVar

from .base import Tool
from .registry import ToolRegistry
from .resources import Resource, ResourceRegistry

logger = logging.getLogger(__name__)

TOOLS_GROUP = "bifrost_mcp_server.tools"
RESOURCES_GROUP = "bifrost_mcp_server.resources"

T = TypeVar("T")


def _collect(group: str, expected: Type[T], host: Any) -> List[T]:
    """
    Load every entry point of `group` and keep the instances of `expected`.

    A plugin that fails to import, raises, or returns something else is
    logged and skipped.
    """
    collected: List[T] = []

    for entry_point in entry_points(group=group):
        try:
            factory = entry_point.load()
            produced = factory(host)
        except Exception as e:
            logger.error(
                f"Failed to load plugin '{entry_point.name}' from {group}: {e}",
                exc_info=True,
            )
            continue

        items: Iterable[Any] = (
            [produced] if isinstance(produced, expected) else produced or []
        )
        try:
            items = list(items)
        except TypeError:
            logger.error(
                f"Plugin '{entry_point.name}' returned {type(produced).__name__}, "
                f"expected {expected.__name__}"
            )
            continue

        for item in items:
            if isinstance(item, expected):
                collected.append(item)
            else:
                logger.warning(
                    f"Plugin '{entry_point.name}' produced {type(item).__name__}, "
                    f"skipping (expected {expected.__name__})"
                )

        logger.info(f"Loaded plugin '{entry_point.name}' ({group})")

    return collected


def load_plugin_tools(host: Any) -> List[Tool]:
    return _collect(TOOLS_GROUP, Tool, host)


def load_plugin_resources(host: Any) -> List[Resource]:
    return _collect(RESOURCES_GROUP, Resource, host)


def register_plugins(
    host: Any, tool_registry: ToolRegistry, resource_registry: ResourceRegistry
) -> int:
    """
    Discover plugin capabilities and register them.

    Returns:
        Number of capabilities registered
    """
    count = 0
    for tool in load_plugin_tools(host):
        tool_registry.register(tool)
        count += 1
    for resource in load_plugin_resources(host):
        resource_registry.register(resource)
        count += 1
    return count
