"""
Host application collaborator.

The query and mutation surface that built-in tools and resources operate on.
"""

from .base import HostApplication
from .memory import InMemoryHost, default_assets, default_scene
from .models import (
    AssetRecord,
    BuildScene,
    BuildSettings,
    ComponentInfo,
    HostError,
    ProjectInfo,
    Scene,
    SceneObject,
    SelectedItem,
    Selection,
    Vector3,
)

__all__ = [
    "HostApplication",
    "InMemoryHost",
    "default_assets",
    "default_scene",
    "HostError",
    "AssetRecord",
    "BuildScene",
    "BuildSettings",
    "ComponentInfo",
    "ProjectInfo",
    "Scene",
    "SceneObject",
    "SelectedItem",
    "Selection",
    "Vector3",
]
