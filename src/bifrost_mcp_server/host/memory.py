"""
In-memory host application.

A self-contained scene/asset model standing in for a live application. The
standalone server runs against it and the test-suite uses it as a fixture.
"""

import copy
import logging
import threading
import uuid
from typing import Dict, List, Optional, Tuple

from .base import HostApplication
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

logger = logging.getLogger(__name__)

PRIMITIVE_COLLIDERS = {
    "Cube": "BoxCollider",
    "Sphere": "SphereCollider",
    "Capsule": "CapsuleCollider",
    "Cylinder": "CapsuleCollider",
    "Plane": "MeshCollider",
    "Quad": "MeshCollider",
}


def _new_guid() -> str:
    return uuid.uuid4().hex


def default_assets() -> List[AssetRecord]:
    """Starter asset index of a new project"""
    seed = [
        ("PlayerController", "Script", "Assets/Scripts/PlayerController.cs"),
        ("CameraFollow", "Script", "Assets/Scripts/CameraFollow.cs"),
        ("Player", "Prefab", "Assets/Prefabs/Player.prefab"),
        ("Ground", "Material", "Assets/Materials/Ground.mat"),
        ("Skybox", "Material", "Assets/Materials/Skybox.mat"),
        ("Checker", "Texture", "Assets/Textures/Checker.png"),
    ]
    return [
        AssetRecord(name=name, type=asset_type, path=path, guid=_new_guid())
        for name, asset_type, path in seed
    ]


def default_scene(name: str = "SampleScene") -> Scene:
    """A fresh scene holding a camera and a light"""
    camera = SceneObject(
        name="Main Camera",
        tag="MainCamera",
        position=Vector3(0.0, 1.0, -10.0),
        components=[
            ComponentInfo("Transform"),
            ComponentInfo("Camera"),
            ComponentInfo("AudioListener"),
        ],
    )
    light = SceneObject(
        name="Directional Light",
        position=Vector3(0.0, 3.0, 0.0),
        rotation=Vector3(50.0, -30.0, 0.0),
        components=[ComponentInfo("Transform"), ComponentInfo("Light")],
    )
    return Scene(name=name, path=f"Assets/Scenes/{name}.scene", roots=[camera, light])


class InMemoryHost(HostApplication):
    """
    Host application backed by plain Python objects.

    One re-entrant lock serializes every query and mutation; queries hand
    out deep copies so callers never hold references into live state.
    """

    def __init__(
        self,
        project_name: str = "Bifrost Project",
        app_version: str = "1.0.0",
        project_path: str = "/projects/bifrost/Assets",
        scenes: Optional[List[Scene]] = None,
        assets: Optional[List[AssetRecord]] = None,
    ):
        self._lock = threading.RLock()
        self._project = ProjectInfo(
            product_name=project_name,
            app_version=app_version,
            project_path=project_path,
        )

        initial = scenes or [default_scene()]
        self._scenes: Dict[str, Scene] = {scene.name: scene for scene in initial}
        self._active = initial[0].name

        self._assets: List[AssetRecord] = (
            list(assets) if assets is not None else default_assets()
        )
        for scene in initial:
            self._index_scene_asset(scene)

        self._build = BuildSettings(
            scenes=[BuildScene(path=scene.path) for scene in initial],
            player_settings={
                "companyName": "DefaultCompany",
                "productName": project_name,
                "applicationIdentifier": "com.defaultcompany.bifrost",
                "defaultScreenWidth": 1920,
                "defaultScreenHeight": 1080,
                "fullscreen": "FullScreenWindow",
            },
        )
        self._selected_paths: List[str] = []

    # =============================================================================
    # Query surface
    # =============================================================================

    def project_info(self) -> ProjectInfo:
        with self._lock:
            return copy.deepcopy(self._project)

    def active_scene(self) -> Scene:
        with self._lock:
            return copy.deepcopy(self._scenes[self._active])

    def selection(self) -> Selection:
        with self._lock:
            scene = self._scenes[self._active]
            items = []
            for path in self._selected_paths:
                obj = self._resolve(scene, path)
                if obj is not None:
                    items.append(SelectedItem(name=obj.name, type="SceneObject", path=path))

            active = items[-1].name if items else None
            return Selection(active_object=active, objects=items)

    def build_settings(self) -> BuildSettings:
        with self._lock:
            return copy.deepcopy(self._build)

    def find_assets(self, asset_type: Optional[str] = None) -> List[AssetRecord]:
        with self._lock:
            if not asset_type:
                return copy.deepcopy(self._assets)
            wanted = asset_type.lower()
            return [
                copy.deepcopy(asset) for asset in self._assets
                if asset.type.lower() == wanted
            ]

    # =============================================================================
    # Mutation surface
    # =============================================================================

    def add_asset(self, name: str, asset_type: str, path: str) -> AssetRecord:
        record = AssetRecord(name=name, type=asset_type, path=path, guid=_new_guid())
        with self._lock:
            self._assets.append(record)
        return record

    def create_scene(self, name: str, path: Optional[str] = None) -> Scene:
        with self._lock:
            if name in self._scenes:
                raise HostError(f"Scene '{name}' already exists")

            scene = default_scene(name)
            if path:
                scene.path = path
            scene.is_dirty = True
            self._scenes[name] = scene
            self._active = name
            self._selected_paths = []
            self._index_scene_asset(scene)

            logger.info(f"Created scene '{name}' at {scene.path}")
            return copy.deepcopy(scene)

    def load_scene(self, name: str, additive: bool = False) -> Scene:
        with self._lock:
            scene = self._find_scene(name)
            if not additive:
                for other in self._scenes.values():
                    if other is not scene:
                        other.is_loaded = False
                self._active = scene.name
                self._selected_paths = []
            scene.is_loaded = True

            logger.info(f"Loaded scene '{scene.name}' ({'additive' if additive else 'single'})")
            return copy.deepcopy(scene)

    def save_scene(self, name: Optional[str] = None) -> Scene:
        with self._lock:
            scene = self._find_scene(name) if name else self._scenes[self._active]
            scene.is_dirty = False
            logger.info(f"Saved scene '{scene.name}' to {scene.path}")
            return copy.deepcopy(scene)

    def create_object(
        self,
        name: str,
        primitive: Optional[str] = None,
        position: Optional[Vector3] = None,
        rotation: Optional[Vector3] = None,
        scale: Optional[Vector3] = None,
        parent: Optional[str] = None,
        components: Optional[List[ComponentInfo]] = None,
    ) -> Tuple[str, SceneObject]:
        if not name:
            raise HostError("Object name is required")

        obj = SceneObject(name=name, components=[ComponentInfo("Transform")])
        if primitive and primitive != "None":
            if primitive not in PRIMITIVE_COLLIDERS:
                raise HostError(f"Unknown primitive type: {primitive}")
            obj.components += [
                ComponentInfo("MeshFilter"),
                ComponentInfo("MeshRenderer"),
                ComponentInfo(PRIMITIVE_COLLIDERS[primitive]),
            ]
        if position is not None:
            obj.position = position
        if rotation is not None:
            obj.rotation = rotation
        if scale is not None:
            obj.scale = scale
        for component in components or []:
            if not obj.has_component(component.type):
                obj.components.append(component)

        with self._lock:
            scene = self._scenes[self._active]
            if parent:
                parent_obj = self._resolve(scene, parent)
                if parent_obj is None:
                    raise HostError(f"Parent object not found: {parent}")
                parent_obj.children.append(obj)
                path = f"{self._path_of(scene, parent_obj)}/{name}"
            else:
                scene.roots.append(obj)
                path = name

            scene.is_dirty = True
            self._selected_paths = [path]
            return path, copy.deepcopy(obj)

    def find_objects(
        self,
        name: Optional[str] = None,
        tag: Optional[str] = None,
        component: Optional[str] = None,
        active_only: bool = False,
    ) -> List[Tuple[str, SceneObject]]:
        with self._lock:
            scene = self._scenes[self._active]
            matches = []
            for path, obj in self._walk_with_paths(scene):
                if name and name.lower() not in obj.name.lower():
                    continue
                if tag and obj.tag != tag:
                    continue
                if component and not obj.has_component(component):
                    continue
                if active_only and not obj.active:
                    continue
                matches.append((path, copy.deepcopy(obj)))
            return matches

    def modify_transform(
        self,
        target: str,
        position: Optional[Vector3] = None,
        rotation: Optional[Vector3] = None,
        scale: Optional[Vector3] = None,
    ) -> SceneObject:
        with self._lock:
            scene = self._scenes[self._active]
            obj = self._resolve(scene, target)
            if obj is None:
                raise HostError(f"Object not found: {target}")

            if position is not None:
                obj.position = position
            if rotation is not None:
                obj.rotation = rotation
            if scale is not None:
                obj.scale = scale
            scene.is_dirty = True
            return copy.deepcopy(obj)

    def destroy_object(self, target: str) -> int:
        with self._lock:
            scene = self._scenes[self._active]
            obj = self._resolve(scene, target)
            if obj is None:
                raise HostError(f"Object not found: {target}")

            path = self._path_of(scene, obj)
            removed = sum(1 for _ in obj.walk())
            siblings = self._siblings_of(scene, obj)
            siblings.remove(obj)
            scene.is_dirty = True

            self._selected_paths = [
                p for p in self._selected_paths
                if p != path and not p.startswith(path + "/")
            ]
            return removed

    # =============================================================================
    # Internals (callers hold the lock)
    # =============================================================================

    def _find_scene(self, name: str) -> Scene:
        scene = self._scenes.get(name)
        if scene is None:
            # Accept a scene path as well as a name
            scene = next((s for s in self._scenes.values() if s.path == name), None)
        if scene is None:
            raise HostError(f"Scene not found: {name}")
        return scene

    def _index_scene_asset(self, scene: Scene) -> None:
        if not any(a.path == scene.path for a in self._assets):
            self._assets.append(
                AssetRecord(name=scene.name, type="Scene", path=scene.path, guid=_new_guid())
            )

    def _walk_with_paths(self, scene: Scene):
        stack = [(root.name, root) for root in reversed(scene.roots)]
        while stack:
            path, obj = stack.pop()
            yield path, obj
            for child in reversed(obj.children):
                stack.append((f"{path}/{child.name}", child))

    def _resolve(self, scene: Scene, target: str) -> Optional[SceneObject]:
        """Find an object by slash-separated path, or by name anywhere"""
        for path, obj in self._walk_with_paths(scene):
            if path == target:
                return obj
        if "/" not in target:
            for _, obj in self._walk_with_paths(scene):
                if obj.name == target:
                    return obj
        return None

    def _path_of(self, scene: Scene, target: SceneObject) -> str:
        for path, obj in self._walk_with_paths(scene):
            if obj is target:
                return path
        raise HostError(f"Object is not part of scene '{scene.name}'")

    def _siblings_of(self, scene: Scene, target: SceneObject) -> List[SceneObject]:
        if any(root is target for root in scene.roots):
            return scene.roots
        for obj in scene.walk():
            if any(child is target for child in obj.children):
                return obj.children
        raise HostError(f"Object is not part of scene '{scene.name}'")
