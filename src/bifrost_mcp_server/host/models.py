"""
Plain data structures exchanged with the host application.

The host's query surface returns these (as detached copies) and its
mutation surface accepts them. They carry no behaviour beyond conversion
to JSON-ready dicts.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class HostError(Exception):
    """Raised by the host when a requested operation cannot be performed"""


@dataclass
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass
class ComponentInfo:
    """A component attached to a scene object"""

    type: str
    enabled: bool = True
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "enabled": self.enabled}


@dataclass
class SceneObject:
    """Node of a scene's object graph"""

    name: str
    active: bool = True
    tag: str = "Untagged"
    layer: str = "Default"
    position: Vector3 = field(default_factory=Vector3)
    rotation: Vector3 = field(default_factory=Vector3)
    scale: Vector3 = field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))
    components: List[ComponentInfo] = field(default_factory=list)
    children: List["SceneObject"] = field(default_factory=list)

    def has_component(self, type_name: str) -> bool:
        wanted = type_name.lower()
        return any(c.type.lower() == wanted for c in self.components)

    def walk(self):
        """Yield this node and all descendants, depth first"""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Scene:
    name: str
    path: str
    roots: List[SceneObject] = field(default_factory=list)
    is_dirty: bool = False
    is_loaded: bool = True
    build_index: int = -1

    def walk(self):
        for root in self.roots:
            yield from root.walk()


@dataclass
class AssetRecord:
    """Entry of the host's asset index"""

    name: str
    type: str
    path: str
    guid: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type, "path": self.path, "guid": self.guid}


@dataclass
class BuildScene:
    path: str
    enabled: bool = True


@dataclass
class BuildSettings:
    active_build_target: str = "StandaloneLinux64"
    target_group: str = "Standalone"
    development_build: bool = False
    scenes: List[BuildScene] = field(default_factory=list)
    player_settings: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProjectInfo:
    product_name: str
    app_version: str
    project_path: str


@dataclass
class SelectedItem:
    name: str
    type: str
    path: Optional[str] = None
    asset_path: Optional[str] = None


@dataclass
class Selection:
    active_object: Optional[str] = None
    objects: List[SelectedItem] = field(default_factory=list)
