"""Pydantic schemas for wristpack.

This module exports the input, configuration and output models:
- Artifact, ArtifactListing: the artifact stream consumed by the stage
- BundleTag, DeviceBundleTag, CompanionBundleTag: bundle component tags
- ProjectConfig, TileDeclaration, AppType: wristpack.yaml configuration
- ManifestDescriptor and its parts: the manifest document
"""

from __future__ import annotations

from wristpack_core.schemas.artifact import Artifact, ArtifactEntry, ArtifactListing
from wristpack_core.schemas.bundle_tag import (
    BUNDLE_TAG_ADAPTER,
    BundleTag,
    CompanionBundleTag,
    DeviceBundleTag,
)
from wristpack_core.schemas.manifest import (
    MANIFEST_FILE_NAME,
    MANIFEST_VERSION,
    CompanionComponent,
    Components,
    ManifestDescriptor,
    SdkVersion,
    Tile,
    WatchComponent,
)
from wristpack_core.schemas.project_config import (
    PROJECT_FILE_NAME,
    AppType,
    ProjectConfig,
    TileDeclaration,
)

__all__: list[str] = [
    # Artifacts
    "Artifact",
    "ArtifactEntry",
    "ArtifactListing",
    # Bundle tags
    "BUNDLE_TAG_ADAPTER",
    "BundleTag",
    "DeviceBundleTag",
    "CompanionBundleTag",
    # Project configuration
    "PROJECT_FILE_NAME",
    "AppType",
    "ProjectConfig",
    "TileDeclaration",
    # Manifest
    "MANIFEST_FILE_NAME",
    "MANIFEST_VERSION",
    "CompanionComponent",
    "Components",
    "ManifestDescriptor",
    "SdkVersion",
    "Tile",
    "WatchComponent",
]
