"""
Scene Object Tools

Create, find, move and destroy objects in the active scene.
"""

import logging
from typing import List, Literal, Optional

from pydantic import Field

from ..core import ExecutionContext, Tool
from ..core.types import ToolCallResult
from ..core.types.models import MCPModel
from ..host import ComponentInfo, HostApplication, HostError
from .params import Vector3Param, optional_vector

logger = logging.getLogger(__name__)

FIND_RESULT_LIMIT = 100

PrimitiveType = Literal["None", "Cube", "Sphere", "Capsule", "Cylinder", "Plane", "Quad"]


class ComponentParam(MCPModel):
    """Component to attach to a new object"""

    type: str = Field(min_length=1, description="Component type name")
    properties: dict = Field(default_factory=dict, description="Initial property values")


class CreateObjectParams(MCPModel):
    """Parameters for creating a scene object"""

    name: str = Field(min_length=1, description="Name of the object")
    primitive_type: PrimitiveType = Field(
        default="None", description="Primitive type to create"
    )
    position: Optional[Vector3Param] = Field(default=None, description="World position")
    rotation: Optional[Vector3Param] = Field(default=None, description="Euler rotation in degrees")
    scale: Optional[Vector3Param] = Field(default=None, description="Local scale")
    parent: Optional[str] = Field(
        default=None, description="Path or name of the parent object"
    )
    components: List[ComponentParam] = Field(
        default_factory=list, description="Additional components to attach"
    )


class FindObjectsParams(MCPModel):
    """Parameters for searching scene objects; all criteria must match"""

    name: Optional[str] = Field(
        default=None, description="Case-insensitive substring of the object name"
    )
    tag: Optional[str] = Field(default=None, description="Tag to filter by")
    component: Optional[str] = Field(default=None, description="Component type to filter by")
    active_only: bool = Field(default=False, description="Skip inactive objects")


class ModifyTransformParams(MCPModel):
    """Parameters for changing an object's transform"""

    target: str = Field(min_length=1, description="Object name or path")
    position: Optional[Vector3Param] = Field(default=None, description="New world position")
    rotation: Optional[Vector3Param] = Field(default=None, description="New Euler rotation")
    scale: Optional[Vector3Param] = Field(default=None, description="New local scale")


class DestroyObjectParams(MCPModel):
    """Parameters for destroying an object"""

    target: str = Field(min_length=1, description="Object name or path to destroy")


class CreateObjectTool(Tool[CreateObjectParams]):
    name = "create_object"
    description = "Create an object in the active scene, optionally as a primitive with components"
    params_model = CreateObjectParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: CreateObjectParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        components = [
            ComponentInfo(type=c.type, properties=dict(c.properties))
            for c in params.components
        ]
        try:
            path, _ = self.host.create_object(
                params.name,
                primitive=params.primitive_type,
                position=optional_vector(params.position),
                rotation=optional_vector(params.rotation),
                scale=optional_vector(params.scale),
                parent=params.parent,
                components=components,
            )
        except HostError as e:
            return self.error(f"Failed to create object: {e}")

        logger.info(f"Created object {path} for {ctx.client_id}")
        return self.success(f"Created object '{path}'")


class FindObjectsTool(Tool[FindObjectsParams]):
    name = "find_objects"
    description = "Find objects in the active scene by name, tag or component"
    params_model = FindObjectsParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: FindObjectsParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        matches = self.host.find_objects(
            name=params.name,
            tag=params.tag,
            component=params.component,
            active_only=params.active_only,
        )
        returned = matches[:FIND_RESULT_LIMIT]
        return self.json_result(
            {
                "found": len(matches),
                "returned": len(returned),
                "objects": [
                    {
                        "name": obj.name,
                        "path": path,
                        "active": obj.active,
                        "tag": obj.tag,
                        "layer": obj.layer,
                    }
                    for path, obj in returned
                ],
            }
        )


class ModifyTransformTool(Tool[ModifyTransformParams]):
    name = "modify_transform"
    description = "Change the position, rotation or scale of an object"
    params_model = ModifyTransformParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: ModifyTransformParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        if params.position is None and params.rotation is None and params.scale is None:
            return self.error("At least one of position, rotation or scale is required")

        try:
            obj = self.host.modify_transform(
                params.target,
                position=optional_vector(params.position),
                rotation=optional_vector(params.rotation),
                scale=optional_vector(params.scale),
            )
        except HostError as e:
            return self.error(f"Failed to modify transform: {e}")
        return self.success(f"Modified transform for '{obj.name}'")


class DestroyObjectTool(Tool[DestroyObjectParams]):
    name = "destroy_object"
    description = "Destroy an object and its children"
    params_model = DestroyObjectParams

    def __init__(self, host: HostApplication):
        self.host = host

    async def execute(
        self, params: DestroyObjectParams, ctx: ExecutionContext
    ) -> ToolCallResult:
        try:
            removed = self.host.destroy_object(params.target)
        except HostError as e:
            return self.error(f"Failed to destroy object: {e}")
        return self.success(f"Destroyed '{params.target}' ({removed} objects removed)")
