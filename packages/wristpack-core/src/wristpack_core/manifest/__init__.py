"""Manifest stage for wristpack.

This module exports the pieces of the manifest stage:
- validate_bundle_tag: Bundle tag validation
- ComponentAggregator: Stateful component accumulation
- map_tiles / tiles_for_build: Tile resolution at finalize
- ManifestEmitter: Manifest document rendering
- ManifestStage / app_package_manifest: Stream wrapper used by hosts
"""

from __future__ import annotations

from wristpack_core.manifest.aggregator import (
    AggregatorState,
    ComponentAggregator,
    ComponentsState,
)
from wristpack_core.manifest.emitter import ManifestEmitter
from wristpack_core.manifest.source_maps import SourceMapTree
from wristpack_core.manifest.stage import (
    ManifestStage,
    app_package_manifest,
    generate_build_id,
)
from wristpack_core.manifest.tiles import map_tiles, tiles_for_build
from wristpack_core.manifest.validator import validate_bundle_tag

__all__: list[str] = [
    # Validation
    "validate_bundle_tag",
    # Aggregation
    "AggregatorState",
    "ComponentAggregator",
    "ComponentsState",
    "SourceMapTree",
    # Finalize
    "map_tiles",
    "tiles_for_build",
    "ManifestEmitter",
    # Stage
    "ManifestStage",
    "app_package_manifest",
    "generate_build_id",
]
