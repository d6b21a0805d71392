"""
Project resources.

Project layout, build configuration and the asset index.
"""

import posixpath
from typing import Dict

from ..core.resources import Resource
from ..core.types import ReadResourceParams, ResourceReadResult
from ..host import BuildScene, HostApplication

DEFAULT_ASSET_LIMIT = 100

# Summary key -> asset type counted under it
ASSET_SUMMARY_TYPES = {
    "scripts": "Script",
    "prefabs": "Prefab",
    "materials": "Material",
    "textures": "Texture",
    "models": "Model",
    "audioClips": "AudioClip",
    "animations": "AnimationClip",
    "scenes": "Scene",
}


def _scene_entry(scene: BuildScene) -> Dict[str, object]:
    return {
        "path": scene.path,
        "name": posixpath.splitext(posixpath.basename(scene.path))[0],
        "enabled": scene.enabled,
    }


class ProjectStructureResource(Resource):
    uri = "app://project/structure"
    name = "Project Structure"
    description = "Project identity, build scenes and asset counts per type"

    def __init__(self, host: HostApplication):
        super().__init__()
        self.host = host

    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        info = self.host.project_info()
        build = self.host.build_settings()

        counts = {key: 0 for key in ASSET_SUMMARY_TYPES}
        lookup = {asset_type.lower(): key for key, asset_type in ASSET_SUMMARY_TYPES.items()}
        for asset in self.host.find_assets():
            key = lookup.get(asset.type.lower())
            if key is not None:
                counts[key] += 1

        return self.json_result(
            params,
            {
                "projectName": info.product_name,
                "appVersion": info.app_version,
                "projectPath": info.project_path,
                "scenes": [_scene_entry(scene) for scene in build.scenes],
                "assets": counts,
            },
        )


class BuildSettingsResource(Resource):
    uri = "app://build/settings"
    name = "Build Settings"
    description = "Active build target and build configuration"

    def __init__(self, host: HostApplication):
        super().__init__()
        self.host = host

    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        build = self.host.build_settings()
        return self.json_result(
            params,
            {
                "activeBuildTarget": build.active_build_target,
                "selectedBuildTargetGroup": build.target_group,
                "developmentBuild": build.development_build,
                "buildSceneList": [_scene_entry(scene) for scene in build.scenes],
                "playerSettings": dict(build.player_settings),
            },
        )


class AssetsListResource(Resource):
    """
    Asset index of the project.

    Accepts a `?type=<T>` suffix on the URI to list one asset type only.
    The listing is capped; `totalAssets` always reports the full match count.
    """

    uri = "app://assets/list"
    name = "Assets List"
    description = "Project assets, optionally filtered with ?type=<AssetType>"

    def __init__(self, host: HostApplication, limit: int = DEFAULT_ASSET_LIMIT):
        super().__init__()
        self.host = host
        self.limit = limit

    async def read(self, params: ReadResourceParams) -> ResourceReadResult:
        asset_type = self.query(params).get("type") or None
        matches = self.host.find_assets(asset_type)
        returned = matches[: self.limit]

        return self.json_result(
            params,
            {
                "totalAssets": len(matches),
                "returnedAssets": len(returned),
                "filterType": asset_type or "all",
                "assets": [asset.to_dict() for asset in returned],
            },
        )
