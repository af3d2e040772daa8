"""Build artifact models for wristpack.

An Artifact is one item of the stream flowing through the packaging
pipeline. The manifest stage reads its attachments and forwards it
untouched. ArtifactListing lets a host describe such a stream in a
YAML/JSON file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from wristpack_core.errors import ConfigurationError


class Artifact(BaseModel):
    """An already-compiled build output with optional attachments.

    Attributes:
        relative: Path of the artifact relative to ``base``; used as the
            component filename in the manifest.
        base: Base directory the relative path is anchored to.
        contents: Raw artifact bytes. Opaque to the manifest stage.
        component_bundle: Raw bundle tag attachment, not yet validated.
        component_map_key: Dot-delimited source map key.

    Example:
        >>> artifact = Artifact(
        ...     relative="device-ionic.zip",
        ...     component_bundle={"type": "device", "family": "ionic", "platform": ["ionic"]},
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    relative: str = Field(
        ...,
        min_length=1,
        description="Path relative to base",
    )
    base: str | None = Field(
        default=None,
        description="Base directory",
    )
    contents: bytes = Field(
        default=b"",
        description="Artifact contents",
    )
    component_bundle: Any | None = Field(
        default=None,
        description="Raw bundle component tag",
    )
    component_map_key: str | None = Field(
        default=None,
        description="Dot-delimited source map key",
    )

    @property
    def path(self) -> str:
        """Full path of the artifact (base joined with relative)."""
        if self.base is None:
            return self.relative
        return os.path.join(self.base, self.relative)


class ArtifactEntry(BaseModel):
    """One entry of an artifact listing file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., min_length=1, description="Artifact path")
    component_bundle: Any | None = Field(
        default=None,
        description="Raw bundle component tag, validated by the manifest stage",
    )
    component_map_key: str | None = Field(
        default=None,
        description="Dot-delimited source map key",
    )


class ArtifactListing(BaseModel):
    """Description of an artifact stream, loaded from YAML or JSON.

    Example:
        >>> listing = ArtifactListing.from_yaml("artifacts.yaml")
        >>> artifacts = listing.to_artifacts()
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    artifacts: list[ArtifactEntry] = Field(
        default_factory=list,
        description="Artifacts in stream order",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ArtifactListing:
        """Load an artifact listing.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
            ConfigurationError: If the document is not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Top-level YAML value must be a mapping",
                file_path=str(path),
            )

        return cls.model_validate(data)

    def to_artifacts(self, base: str | None = None) -> list[Artifact]:
        """Build the Artifact stream described by this listing.

        Args:
            base: Optional base directory for every artifact.
        """
        return [
            Artifact(
                relative=entry.path,
                base=base,
                component_bundle=entry.component_bundle,
                component_map_key=entry.component_map_key,
            )
            for entry in self.artifacts
        ]
