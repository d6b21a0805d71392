"""
Built-in resources

Read-only app:// snapshots of the host application:
1. Scene hierarchy and current selection
2. Project structure, build settings and asset index
3. Console log tail
"""

from typing import List

from ..core.log_buffer import LogBuffer
from ..core.resources import Resource
from ..host import HostApplication
from .console import DEFAULT_READ_LIMIT, ConsoleLogsResource
from .project import (
    DEFAULT_ASSET_LIMIT,
    AssetsListResource,
    BuildSettingsResource,
    ProjectStructureResource,
)
from .scene import DEFAULT_MAX_DEPTH, SceneHierarchyResource, SelectionResource


def create_builtin_resources(
    host: HostApplication,
    log_buffer: LogBuffer,
    max_depth: int = DEFAULT_MAX_DEPTH,
    asset_limit: int = DEFAULT_ASSET_LIMIT,
    log_read_limit: int = DEFAULT_READ_LIMIT,
) -> List[Resource]:
    """Instantiate every built-in resource against one host and log buffer"""
    return [
        SceneHierarchyResource(host, max_depth=max_depth),
        ProjectStructureResource(host),
        SelectionResource(host),
        ConsoleLogsResource(log_buffer, read_limit=log_read_limit),
        BuildSettingsResource(host),
        AssetsListResource(host, limit=asset_limit),
    ]


__all__ = [
    "create_builtin_resources",
    "SceneHierarchyResource",
    "SelectionResource",
    "ProjectStructureResource",
    "BuildSettingsResource",
    "AssetsListResource",
    "ConsoleLogsResource",
]
