"""
Host application boundary.

HostApplication is the collaborator built-in tools and resources talk to.
A real deployment adapts the running application behind it; InMemoryHost
is the reference implementation.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..core.context import ServerContext
from .models import (
    AssetRecord,
    BuildSettings,
    ComponentInfo,
    ProjectInfo,
    Scene,
    SceneObject,
    Selection,
    Vector3,
)


class HostApplication(ABC):
    """
    Query and mutation surface of the host application.

    Query methods return detached copies, safe to serialize while the host
    keeps changing. Mutations raise HostError for requests the host rejects
    (unknown target, duplicate scene name, ...). Implementations must be
    safe to call from concurrent tool calls.
    """

    # =============================================================================
    # Query surface
    # =============================================================================

    @abstractmethod
    def project_info(self) -> ProjectInfo:
        ...

    @abstractmethod
    def active_scene(self) -> Scene:
        ...

    @abstractmethod
    def selection(self) -> Selection:
        ...

    @abstractmethod
    def build_settings(self) -> BuildSettings:
        ...

    @abstractmethod
    def find_assets(self, asset_type: Optional[str] = None) -> List[AssetRecord]:
        """
        Asset index, optionally restricted to one type (case-insensitive).
        """

    def server_context(self) -> ServerContext:
        """Host facts attached to every tool call's execution context"""
        info = self.project_info()
        return ServerContext(
            current_scene=self.active_scene().name,
            project_path=info.project_path,
            app_version=info.app_version,
        )

    # =============================================================================
    # Mutation surface
    # =============================================================================

    @abstractmethod
    def create_scene(self, name: str, path: Optional[str] = None) -> Scene:
        ...

    @abstractmethod
    def load_scene(self, name: str, additive: bool = False) -> Scene:
        ...

    @abstractmethod
    def save_scene(self, name: Optional[str] = None) -> Scene:
        """Save the named scene, or the active scene when name is None"""

    @abstractmethod
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
        """
        Create an object in the active scene.

        Returns:
            Tuple of (path of the new object, copy of the new object)
        """

    @abstractmethod
    def find_objects(
        self,
        name: Optional[str] = None,
        tag: Optional[str] = None,
        component: Optional[str] = None,
        active_only: bool = False,
    ) -> List[Tuple[str, SceneObject]]:
        """Objects of the active scene matching every given criterion"""

    @abstractmethod
    def modify_transform(
        self,
        target: str,
        position: Optional[Vector3] = None,
        rotation: Optional[Vector3] = None,
        scale: Optional[Vector3] = None,
    ) -> SceneObject:
        ...

    @abstractmethod
    def destroy_object(self, target: str) -> int:
        """
        Remove an object and its descendants.

        Returns:
            Number of objects removed
        """
