"""Component aggregation for the manifest stage.

The ComponentAggregator ingests artifacts one at a time, validates their
bundle tags and builds up the component and source map trees. Once the
input is exhausted, finalize() maps tiles, emits the manifest and moves
the aggregator to its terminal state.

State machine:
    EMPTY --ingest--> ACCUMULATING --finalize--> FINALIZED
    EMPTY --finalize--> FINALIZED

A call that raises leaves the aggregator exactly as it was before the call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from wristpack_core.compat.capabilities import CapabilityLookup, TableCapabilityLookup
from wristpack_core.errors import (
    DuplicateComponentError,
    LifecycleError,
    MixedComponentTypeError,
    SourceMapKeyError,
    ValidationError,
)
from wristpack_core.manifest.emitter import ManifestEmitter
from wristpack_core.manifest.source_maps import SourceMapTree
from wristpack_core.manifest.tiles import tiles_for_build
from wristpack_core.manifest.validator import validate_bundle_tag
from wristpack_core.paths import normalize_to_posix
from wristpack_core.schemas.bundle_tag import CompanionBundleTag, DeviceBundleTag
from wristpack_core.schemas.manifest import (
    CompanionComponent,
    Components,
    Tile,
    WatchComponent,
)

if TYPE_CHECKING:
    from wristpack_core.compat.sdk_version import ApiVersionResolver
    from wristpack_core.schemas.artifact import Artifact
    from wristpack_core.schemas.project_config import ProjectConfig

logger = structlog.get_logger(__name__)


class AggregatorState(str, Enum):
    """Lifecycle states of a ComponentAggregator."""

    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


@dataclass
class ComponentsState:
    """Mutable component state owned by one aggregator.

    Attributes:
        watch: Device components keyed by family, in registration order.
        companion: The companion component, if any.
        tiles: Tiles computed at finalize; None when not computed or empty.
        has_native: A native device bundle has been registered.
        has_js: A JS device bundle has been registered.
    """

    watch: dict[str, WatchComponent] = field(default_factory=dict)
    companion: CompanionComponent | None = None
    tiles: list[Tile] | None = None
    has_native: bool = False
    has_js: bool = False

    def to_components(self) -> Components:
        """Return the manifest view, without the internal flags."""
        return Components(
            watch=dict(self.watch) or None,
            companion=self.companion,
            tiles=list(self.tiles) if self.tiles else None,
        )


class ComponentAggregator:
    """Accumulate bundle components across one build.

    Attributes:
        project_config: Project configuration of the build.
        build_id: Opaque identifier of the build.

    Example:
        >>> aggregator = ComponentAggregator(config, build_id="0x00000000000000ff")
        >>> aggregator.ingest(device_artifact)
        >>> aggregator.ingest(companion_artifact)
        >>> manifest = aggregator.finalize()
        >>> manifest.relative
        'manifest.json'
    """

    def __init__(
        self,
        project_config: ProjectConfig,
        build_id: str,
        *,
        capabilities: CapabilityLookup | None = None,
        version_resolver: ApiVersionResolver | None = None,
    ) -> None:
        self.project_config = project_config
        self.build_id = build_id
        self._capabilities: CapabilityLookup = capabilities or TableCapabilityLookup()
        self._emitter = ManifestEmitter(
            project_config,
            build_id,
            version_resolver=version_resolver,
        )
        self._components = ComponentsState()
        self._source_maps = SourceMapTree()
        self._state = AggregatorState.EMPTY
        self._log = logger.bind(component="component_aggregator", build_id=build_id)

    @property
    def state(self) -> AggregatorState:
        """Current lifecycle state."""
        return self._state

    @property
    def components(self) -> ComponentsState:
        """Component state accumulated so far."""
        return self._components

    @property
    def source_maps(self) -> SourceMapTree:
        """Source map tree accumulated so far."""
        return self._source_maps

    def ingest(self, artifact: Artifact) -> Artifact:
        """Record the attachments of one artifact.

        Args:
            artifact: Artifact from the input stream.

        Returns:
            The same artifact, unchanged.

        Raises:
            LifecycleError: If the aggregator is already finalized.
            ValidationError: If the bundle tag is malformed.
            SourceMapKeyError: If the source map key has an empty segment.
            MixedComponentTypeError: If native and JS device bundles meet.
            DuplicateComponentError: If the component slot is already taken.
        """
        if self._state is AggregatorState.FINALIZED:
            raise LifecycleError("ingest", self._state.value)

        map_key = artifact.component_map_key
        if map_key:
            self._check_map_key(map_key, artifact.relative)

        if artifact.component_bundle is not None:
            tag = validate_bundle_tag(artifact.component_bundle, artifact.relative)
            if isinstance(tag, ValidationError):
                raise tag
            if isinstance(tag, DeviceBundleTag):
                self._add_device(tag, artifact)
            else:
                self._add_companion(tag, artifact)

        if map_key:
            source_map_path = normalize_to_posix(artifact.relative)
            self._source_maps.set(map_key, source_map_path)
            self._log.debug(
                "source_map_recorded",
                key=map_key,
                path=source_map_path,
            )

        self._state = AggregatorState.ACCUMULATING
        return artifact

    def finalize(self) -> Artifact:
        """Map tiles, emit the manifest and finish the build.

        Returns:
            The manifest artifact.

        Raises:
            LifecycleError: If the aggregator is already finalized.
            VersionResolutionError: If SDK API versions cannot be resolved.
        """
        if self._state is AggregatorState.FINALIZED:
            raise LifecycleError("finalize", self._state.value)

        tiles = tiles_for_build(
            self.project_config,
            list(self._components.watch),
            has_native=self._components.has_native,
        )
        manifest = self._emitter.emit(self._components, self._source_maps, tiles=tiles)

        self._components.tiles = tiles
        self._state = AggregatorState.FINALIZED
        return manifest

    def _check_map_key(self, map_key: str, file_path: str) -> None:
        try:
            SourceMapTree.split_key(map_key)
        except ValueError as e:
            raise SourceMapKeyError(map_key, file_path) from e

    def _add_device(self, tag: DeviceBundleTag, artifact: Artifact) -> None:
        has_native = self._components.has_native or tag.is_native
        has_js = self._components.has_js or not tag.is_native

        if has_native and has_js:
            raise MixedComponentTypeError(artifact.relative)

        existing = self._components.watch.get(tag.family)
        if existing is not None:
            raise DuplicateComponentError(
                component=f"device/{tag.family}",
                file_path=artifact.relative,
                existing_path=existing.filename,
            )

        supports = self._capabilities(tag.family) if has_js else None
        self._components.watch[tag.family] = WatchComponent(
            filename=artifact.relative,
            platform=list(tag.platform),
            supports=supports,
        )
        self._components.has_native = has_native
        self._components.has_js = has_js

        self._log.info(
            "bundle_ingested",
            kind="device",
            family=tag.family,
            native=tag.is_native,
            filename=artifact.relative,
        )

    def _add_companion(self, tag: CompanionBundleTag, artifact: Artifact) -> None:
        existing = self._components.companion
        if existing is not None:
            raise DuplicateComponentError(
                component=tag.type,
                file_path=artifact.relative,
                existing_path=existing.filename,
            )

        self._components.companion = CompanionComponent(filename=artifact.relative)
        self._log.info("bundle_ingested", kind="companion", filename=artifact.relative)
