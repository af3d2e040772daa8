"""wristpack-core: Manifest generation for the wristpack packaging pipeline.

This package provides:
- Artifact / ProjectConfig: inputs of the manifest stage
- ComponentAggregator / ManifestStage: the manifest stage itself
- ManifestDescriptor: the manifest.json output contract
- Compatibility lookups for device capabilities and SDK API versions
- JSON Schema export utilities
"""

from __future__ import annotations

__version__ = "0.1.0"

# Compatibility collaborators
from wristpack_core.compat import (
    ApiVersionResolver,
    ApiVersions,
    TableCapabilityLookup,
    sdk_version,
)

# Error types
from wristpack_core.errors import (
    ConfigurationError,
    DuplicateComponentError,
    LifecycleError,
    MixedComponentTypeError,
    SourceMapKeyError,
    ValidationError,
    VersionResolutionError,
    WristpackError,
)

# JSON Schema export functions
from wristpack_core.export import (
    export_manifest_schema,
    export_project_config_schema,
)

# Manifest stage
from wristpack_core.manifest import (
    AggregatorState,
    ComponentAggregator,
    ManifestStage,
    app_package_manifest,
    generate_build_id,
    validate_bundle_tag,
)
from wristpack_core.paths import normalize_to_posix

# Schema models
from wristpack_core.schemas import (
    AppType,
    Artifact,
    ArtifactListing,
    CompanionBundleTag,
    DeviceBundleTag,
    ManifestDescriptor,
    ProjectConfig,
    TileDeclaration,
)

__all__ = [
    "__version__",
    # Manifest stage
    "AggregatorState",
    "ComponentAggregator",
    "ManifestStage",
    "app_package_manifest",
    "generate_build_id",
    "validate_bundle_tag",
    "normalize_to_posix",
    # Compatibility
    "ApiVersionResolver",
    "ApiVersions",
    "TableCapabilityLookup",
    "sdk_version",
    # Errors
    "WristpackError",
    "ValidationError",
    "MixedComponentTypeError",
    "DuplicateComponentError",
    "SourceMapKeyError",
    "LifecycleError",
    "VersionResolutionError",
    "ConfigurationError",
    # JSON Schema exports
    "export_project_config_schema",
    "export_manifest_schema",
    # Schema models
    "AppType",
    "Artifact",
    "ArtifactListing",
    "CompanionBundleTag",
    "DeviceBundleTag",
    "ManifestDescriptor",
    "ProjectConfig",
    "TileDeclaration",
]
