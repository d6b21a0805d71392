"""
Scene Management Tools

Create, load, save and analyze scenes of the host application.
"""

import logging
from typing import Any, Dict, Literal, Optional

from pydantic import Field, field_validator

from ..core import ExecutionContext, Tool
from ..core.context import CancellationToken
from ..core.types import ToolCallResult
from ..core.types.models import MCPModel
from ..host import HostApplication, HostError, SceneObject

logger = logging.getLogger(__name__)


class CreateSceneParams(MCPModel):
    """Parameters for creating a scene"""

    name: str = Field(min_length=1, description="Name of the new scene")
    path: Optional[str] = Field(
        default=None,
        description="Asset path to save the scene at (defaults to Assets/Scenes/<name>.scene)",
    )


class LoadSceneParams(MCPModel):
    """Parameters for loading a scene"""

    name: str = Field(min_length=1, description="Scene name or path")
    mode: Literal["single", "additive"] = Field(
        default="single",
        description="Load mode (single replaces all scenes, additive adds to current)",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def _lower_mode(cls, value):
        return value.lower() if isinstance(value, str) else value


class SaveSceneParams(MCPModel):
    """Parameters for saving a scene"""

    name: Optional[str] = Field(
        default=None, description="Scene to save (defaults to the active scene)"
    )


class AnalyzeSceneParams(MCPModel):
    """Parameters for analyzing the active scene"""

    include_components: bool = Field(
        default=False, description="Include component details in analysis"
    )
    max_depth: int = Field(
        default=10, ge=0, description="Maximum hierarchy depth to analyze"
    )


class CreateSceneTool(Tool[CreateSceneParams]):
    name = "create_scene"
    description = "Create a new scene and make it the active scene"
    params_model = CreateSceneParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: CreateSceneParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        try:
            scene = self.host.create_scene(params.name, params.path)
        except HostError as e:
            return self.error(f"Failed to create scene: {e}")
        return self.success(f"Created scene '{scene.name}' at {scene.path}")


class LoadSceneTool(Tool[LoadSceneParams]):
    name = "load_scene"
    description = "Load a scene by name or path"
    params_model = LoadSceneParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: LoadSceneParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        try:
            scene = self.host.load_scene(params.name, additive=params.mode == "additive")
        except HostError as e:
            return self.error(f"Failed to load scene: {e}")
        return self.success(f"Loaded scene '{scene.name}' ({params.mode})")


class SaveSceneTool(Tool[SaveSceneParams]):
    name = "save_scene"
    description = "Save the active scene, or a named open scene"
    params_model = SaveSceneParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: SaveSceneParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        try:
            scene = self.host.save_scene(params.name)
        except HostError as e:
            return self.error(f"Failed to save scene: {e}")
        return self.success(f"Saved scene '{scene.name}' to {scene.path}")


class AnalyzeSceneTool(Tool[AnalyzeSceneParams]):
    """Report facts, hierarchy and statistics of the active scene"""

    name = "analyze_scene"
    description = "Analyze the active scene: hierarchy, components and statistics"
    params_model = AnalyzeSceneParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: AnalyzeSceneParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        scene = self.host.active_scene()

        hierarchy = [
            self._analyze(
                root, params.include_components, 0, params.max_depth, ctx.cancellation
            )
            for root in scene.roots
        ]

        objects = list(scene.walk())
        statistics = {
            "totalObjects": len(objects),
            "totalComponents": sum(len(obj.components) for obj in objects),
            "cameras": sum(1 for obj in objects if obj.has_component("Camera")),
            "lights": sum(1 for obj in objects if obj.has_component("Light")),
            "audioSources": sum(1 for obj in objects if obj.has_component("AudioSource")),
        }

        logger.debug(
            f"Analyzed scene '{scene.name}': {statistics['totalObjects']} objects"
        )
        return self.json_result(
            {
                "name": scene.name,
                "path": scene.path,
                "isDirty": scene.is_dirty,
                "isLoaded": scene.is_loaded,
                "rootCount": len(scene.roots),
                "buildIndex": scene.build_index,
                "hierarchy": hierarchy,
                "statistics": statistics,
            }
        )

    def _analyze(
        self,
        obj: SceneObject,
        include_components: bool,
        depth: int,
        max_depth: int,
        cancellation: CancellationToken,
    ) -> Dict[str, Any]:
        cancellation.raise_if_cancelled()

        node = {
            "name": obj.name,
            "active": obj.active,
            "tag": obj.tag,
            "layer": obj.layer,
            "position": obj.position.to_dict(),
        }
        if include_components:
            node["components"] = [c.to_dict() for c in obj.components]

        if depth < max_depth and obj.children:
            node["children"] = [
                self._analyze(child, include_components, depth + 1, max_depth, cancellation)
                for child in obj.children
            ]
        return node
