"""
Scene resources.

Snapshots of the active scene graph and the current selection.
"""

import logging
from typing import Any, Dict

from ..core.resources import Resource
from ..core.types import ReadResourceParams, ResourceReadResult
from ..host import HostApplication, SceneObject

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 5


def serialize_object(obj: SceneObject, depth: int, max_depth: int) -> Dict[str, Any]:
    """
    Serialize one node of the scene graph.

    Children are serialized only while `depth` is below `max_depth`; a node
    at the limit, or one without children, carries no `children` field.
    """
    node = {
        "name": obj.name,
        "active": obj.active,
        "tag": obj.tag,
        "layer": obj.layer,
        "position": obj.position.to_dict(),
        "components": [component.to_dict() for component in obj.components],
    }

    if depth < max_depth and obj.children:
        node["children"] = [
            serialize_object(child, depth + 1, max_depth) for child in obj.children
        ]

    return node


class SceneHierarchyResource(Resource):
    uri = "app://scene/hierarchy"
    name = "Scene Hierarchy"
    description = "Object hierarchy of the active scene"

    def __init__(self, host: HostApplication, max_depth: int = DEFAULT_MAX_DEPTH):
        super().__init__()
        self.host = host
        self.max_depth = max_depth

    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        scene = self.host.active_scene()
        hierarchy = {
            "sceneName": scene.name,
            "scenePath": scene.path,
            "rootObjects": [
                serialize_object(root, 0, self.max_depth) for root in scene.roots
            ],
        }
        logger.debug(f"Serialized hierarchy of scene '{scene.name}'")
        return self.json_result(params, hierarchy)


class SelectionResource(Resource):
    uri = "app://selection"
    name = "Current Selection"
    description = "Objects currently selected in the host application"

    def __init__(self, host: HostApplication):
        super().__init__()
        self.host = host

    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        selection = self.host.selection()
        return self.json_result(
            params,
            {
                "activeObject": selection.active_object,
                "sceneObjects": [
                    {"name": item.name, "path": item.path, "type": item.type}
                    for item in selection.objects
                    if item.path is not None
                ],
                "objects": [
                    {
                        "name": item.name,
                        "type": item.type,
                        "assetPath": item.asset_path or "",
                    }
                    for item in selection.objects
                ],
            },
        )
