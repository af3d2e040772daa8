"""Manifest pipeline stage.

ManifestStage plugs the ComponentAggregator into an artifact stream:
every input artifact passes through unchanged, and once the input is
exhausted the manifest artifact is appended as the last item.
"""

from __future__ import annotations

import secrets
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from wristpack_core.manifest.aggregator import ComponentAggregator

if TYPE_CHECKING:
    from wristpack_core.compat.capabilities import CapabilityLookup
    from wristpack_core.compat.sdk_version import ApiVersionResolver
    from wristpack_core.schemas.artifact import Artifact
    from wristpack_core.schemas.project_config import ProjectConfig


def generate_build_id() -> str:
    """Return a random 64-bit build identifier, e.g. ``0x1f2e3d4c5b6a7988``."""
    return f"0x{secrets.randbits(64):016x}"


class ManifestStage:
    """Stream stage producing the package manifest.

    Example:
        >>> stage = ManifestStage(config, build_id=generate_build_id())
        >>> outputs = list(stage.process(artifacts))
        >>> outputs[-1].relative
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
        self.aggregator = ComponentAggregator(
            project_config,
            build_id,
            capabilities=capabilities,
            version_resolver=version_resolver,
        )

    def process(self, artifacts: Iterable[Artifact]) -> Iterator[Artifact]:
        """Forward ``artifacts`` and append the manifest.

        Errors from ingestion or finalize propagate to the consumer of the
        iterator; no manifest is produced after an error.
        """
        for artifact in artifacts:
            yield self.aggregator.ingest(artifact)
        yield self.aggregator.finalize()

    def run(self, artifacts: Iterable[Artifact]) -> Artifact:
        """Consume ``artifacts`` and return only the manifest artifact."""
        for artifact in artifacts:
            self.aggregator.ingest(artifact)
        return self.aggregator.finalize()


def app_package_manifest(
    *,
    project_config: ProjectConfig,
    build_id: str,
    capabilities: CapabilityLookup | None = None,
    version_resolver: ApiVersionResolver | None = None,
) -> ManifestStage:
    """Create the manifest stage for one build."""
    return ManifestStage(
        project_config,
        build_id,
        capabilities=capabilities,
        version_resolver=version_resolver,
    )
