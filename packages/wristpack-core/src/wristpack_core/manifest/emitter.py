"""Manifest emission.

Turns finalized aggregator state into the ManifestDescriptor and wraps it
in the single output artifact of the stage. SDK API versions are only
resolved when the manifest needs them: when JS device code or companion
code is packaged.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import structlog

from wristpack_core.compat.sdk_version import ApiVersionResolver
from wristpack_core.schemas.artifact import Artifact
from wristpack_core.schemas.manifest import (
    MANIFEST_FILE_NAME,
    ManifestDescriptor,
    SdkVersion,
    Tile,
)

if TYPE_CHECKING:
    from wristpack_core.manifest.aggregator import ComponentsState
    from wristpack_core.manifest.source_maps import SourceMapTree
    from wristpack_core.schemas.project_config import ProjectConfig

logger = structlog.get_logger(__name__)


class ManifestEmitter:
    """Build the manifest document for one build.

    Attributes:
        project_config: Project configuration of the build.
        build_id: Opaque identifier of the build.
        version_resolver: Resolver for SDK API versions.
    """

    def __init__(
        self,
        project_config: ProjectConfig,
        build_id: str,
        *,
        version_resolver: ApiVersionResolver | None = None,
    ) -> None:
        self.project_config = project_config
        self.build_id = build_id
        self.version_resolver = version_resolver or ApiVersionResolver()

    @staticmethod
    def includes_sdk_version(state: ComponentsState) -> bool:
        """Whether the manifest declares SDK API versions."""
        return (bool(state.watch) and state.has_js) or state.companion is not None

    def resolve_sdk_version(self, state: ComponentsState) -> SdkVersion | None:
        """Resolve the sdkVersion section, or None when it is omitted.

        Raises:
            VersionResolutionError: If the toolchain version is unknown.
        """
        if not self.includes_sdk_version(state):
            return None

        versions = self.version_resolver.resolve(
            self.project_config.toolchain_version,
            enable_proposed_api=self.project_config.enable_proposed_api,
        )
        return SdkVersion(
            device_api=versions.device_api if state.watch and state.has_js else None,
            companion_api=versions.companion_api if state.companion is not None else None,
        )

    def build_descriptor(
        self,
        state: ComponentsState,
        source_maps: SourceMapTree,
        *,
        tiles: list[Tile] | None = None,
    ) -> ManifestDescriptor:
        """Build the ManifestDescriptor from aggregator state.

        Args:
            state: Component state of the build.
            source_maps: Source map tree of the build.
            tiles: Tiles computed for the build, if any.
        """
        components = state.to_components().model_copy(update={"tiles": tiles or None})
        return ManifestDescriptor(
            build_id=self.build_id,
            components=components,
            source_maps=source_maps.to_dict(),
            sdk_version=self.resolve_sdk_version(state),
            requested_permissions=list(self.project_config.requested_permissions),
            app_id=self.project_config.app_id,
        )

    def emit(
        self,
        state: ComponentsState,
        source_maps: SourceMapTree,
        *,
        tiles: list[Tile] | None = None,
    ) -> Artifact:
        """Render the manifest artifact.

        Returns:
            An Artifact named manifest.json anchored at the current working
            directory, holding the UTF-8 JSON document.
        """
        descriptor = self.build_descriptor(state, source_maps, tiles=tiles)
        manifest = Artifact(
            relative=MANIFEST_FILE_NAME,
            base=os.getcwd(),
            contents=descriptor.to_json().encode("utf-8"),
        )
        logger.info(
            "manifest_emitted",
            build_id=self.build_id,
            path=manifest.path,
            watch=sorted(state.watch),
            companion=state.companion is not None,
            tiles=len(tiles) if tiles else 0,
        )
        return manifest
