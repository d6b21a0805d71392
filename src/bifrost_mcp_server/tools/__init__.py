"""
Built-in tools

Scene management and scene object manipulation against the host application.
"""

from typing import List

from ..core import Tool
from ..host import HostApplication
from .object_tools import (
    CreateObjectTool,
    DestroyObjectTool,
    FindObjectsTool,
    ModifyTransformTool,
)
from .scene_tools import AnalyzeSceneTool, CreateSceneTool, LoadSceneTool, SaveSceneTool

BUILTIN_TOOLS = [
    CreateSceneTool,
    LoadSceneTool,
    SaveSceneTool,
    AnalyzeSceneTool,
    CreateObjectTool,
    FindObjectsTool,
    ModifyTransformTool,
    DestroyObjectTool,
]


def create_builtin_tools(host: HostApplication) -> List[Tool]:
    """Instantiate every built-in tool against `host`"""
    return [tool_class(host) for tool_class in BUILTIN_TOOLS]


__all__ = [
    "BUILTIN_TOOLS",
    "create_builtin_tools",
    "CreateSceneTool",
    "LoadSceneTool",
    "SaveSceneTool",
    "AnalyzeSceneTool",
    "CreateObjectTool",
    "FindObjectsTool",
    "ModifyTransformTool",
    "DestroyObjectTool",
]
