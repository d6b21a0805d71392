"""
Tool registry for tool discovery and management.

This module provides:
- ToolRegistry: thread-safe mapping from tool name to Tool instance
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from .base import Tool
from .types.mcp import ListToolsResult

logger = logging.getLogger(__name__)

RegistryListener = Callable[[], None]


class ToolRegistry:
    """
    Central registry for MCP tools.

    Registration is last-write-wins: registering a second tool under an
    existing name replaces the first. A lock guards the mapping so lookups
    racing with registration see either the old or the new mapping.

    Example:
        ```python
        registry = ToolRegistry()
        registry.register(CreateSceneTool(host))

        tool = registry.get("create_scene")
        mcp_response = registry.get_mcp_tools_list()
        ```
    """

    def __init__(self):
        """Initialize empty registry"""
        self._tools: Dict[str, Tool] = {}
        self._listeners: List[RegistryListener] = []
        self._lock = threading.RLock()
        logger.debug("Tool registry initialized")

    def register(self, tool: Tool) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool instance to register; replaces any tool with the same name
        """
        with self._lock:
            existing = self._tools.get(tool.name)
            if existing is not None and existing is not tool:
                logger.warning(
                    f"Tool '{tool.name}' is already registered "
                    f"({existing.__class__.__name__}), overwriting with "
                    f"{tool.__class__.__name__}"
                )
            self._tools[tool.name] = tool

        logger.info(f"Registered tool: {tool.name}")
        self._notify_listeners()

    def unregister(self, name: str) -> None:
        """
        Remove a tool by name. Unknown names are ignored.

        Args:
            name: Tool name to remove
        """
        with self._lock:
            removed = self._tools.pop(name, None)

        if removed is not None:
            logger.info(f"Unregistered tool: {name}")
            self._notify_listeners()

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._tools

    def get(self, name: str) -> Optional[Tool]:
        """
        Get a tool by name.

        Args:
            name: Tool name to retrieve

        Returns:
            Tool instance, or None if not registered
        """
        with self._lock:
            return self._tools.get(name)

    def get_all(self) -> List[Tool]:
        """
        List all registered tools.

        Returns:
            Snapshot of tool instances in registration order
        """
        with self._lock:
            return list(self._tools.values())

    def clear(self) -> None:
        with self._lock:
            had_tools = bool(self._tools)
            self._tools.clear()

        if had_tools:
            self._notify_listeners()

    def get_mcp_tools_list(self) -> ListToolsResult:
        """
        Generate MCP tools/list response.

        Returns:
            ListToolsResult with one descriptor per registered tool
        """
        tools = [tool.to_descriptor() for tool in self.get_all()]
        logger.debug(f"Generated MCP tools list: {len(tools)} tools")
        return ListToolsResult(tools=tools)

    # =============================================================================
    # Change listeners
    # =============================================================================

    def add_listener(self, listener: RegistryListener) -> None:
        """
        Call `listener` after every change to the set of tools.

        Args:
            listener: Zero-argument callable
        """
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: RegistryListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify_listeners(self) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"Tool registry listener failed: {e}", exc_info=True)

    def __len__(self) -> int:
        """Return number of registered tools"""
        with self._lock:
            return len(self._tools)

    def __contains__(self, name: str) -> bool:
        """Check if tool is registered"""
        return self.has(name)
