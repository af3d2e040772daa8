"""Manifest output models for wristpack.

This module defines the immutable descriptor produced by the manifest
stage. Field names are snake_case in Python and camelCase on the wire;
optional fields that are unset are omitted from the JSON document rather
than written as null.

Version History:
- manifestVersion 6: tiles component, per-family watch components
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MANIFEST_VERSION = 6
"""Manifest document version written by this package."""

MANIFEST_FILE_NAME = "manifest.json"
"""Fixed name of the manifest artifact."""

_OUTPUT_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class WatchComponent(BaseModel):
    """A device bundle registered for one family.

    Attributes:
        filename: Relative path of the device bundle.
        platform: Platforms the bundle targets.
        supports: Capabilities of the family (JS bundles only).
    """

    model_config = _OUTPUT_CONFIG

    filename: str = Field(..., description="Relative path of the bundle")
    platform: list[str] = Field(..., description="Targeted platforms")
    supports: dict[str, Any] | None = Field(
        default=None,
        description="Device capabilities (JS bundles only)",
    )


class CompanionComponent(BaseModel):
    """The companion bundle."""

    model_config = _OUTPUT_CONFIG

    filename: str = Field(..., description="Relative path of the bundle")


class Tile(BaseModel):
    """A tile resolved against the device families in the build.

    Attributes:
        id: Tile identifier.
        name: Tile display name.
        platforms: Families the tile is available on, never empty.
    """

    model_config = _OUTPUT_CONFIG

    id: str = Field(..., description="Tile identifier")
    name: str = Field(..., description="Tile display name")
    platforms: list[str] = Field(
        ...,
        min_length=1,
        description="Families the tile is available on",
    )


class Components(BaseModel):
    """Components section of the manifest."""

    model_config = _OUTPUT_CONFIG

    watch: dict[str, WatchComponent] | None = Field(
        default=None,
        description="Device bundles keyed by family",
    )
    companion: CompanionComponent | None = Field(
        default=None,
        description="Companion bundle",
    )
    tiles: list[Tile] | None = Field(
        default=None,
        description="Tiles (omitted when none apply)",
    )


class SdkVersion(BaseModel):
    """SDK API versions the package was built against."""

    model_config = _OUTPUT_CONFIG

    device_api: str | None = Field(default=None, description="Device API version")
    companion_api: str | None = Field(default=None, description="Companion API version")


class ManifestDescriptor(BaseModel):
    """Immutable manifest document describing a package.

    Attributes:
        build_id: Opaque build identifier supplied by the host.
        components: Registered watch, companion and tile components.
        source_maps: Nested mapping of source map paths.
        manifest_version: Always 6.
        sdk_version: API versions, present only when JS device or companion
            code is packaged.
        requested_permissions: Permissions copied from project configuration.
        app_id: Application identifier copied from project configuration.

    Example:
        >>> descriptor = ManifestDescriptor(
        ...     build_id="0x0a1b2c3d4e5f6071",
        ...     components=Components(),
        ...     requested_permissions=[],
        ...     app_id="b4ae822e-eca9-4fcb-8747-217f2a1f53a1",
        ... )
        >>> descriptor.to_dict()["manifestVersion"]
        6
    """

    model_config = _OUTPUT_CONFIG

    build_id: str = Field(..., description="Build identifier")
    components: Components = Field(..., description="Package components")
    source_maps: dict[str, Any] = Field(
        default_factory=dict,
        description="Source map paths by dot-path",
    )
    manifest_version: Literal[6] = Field(
        default=MANIFEST_VERSION,
        description="Manifest document version",
    )
    sdk_version: SdkVersion | None = Field(
        default=None,
        description="SDK API versions",
    )
    requested_permissions: list[str] = Field(
        default_factory=list,
        description="Requested permissions",
    )
    app_id: str = Field(..., description="Application identifier")

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form of the manifest."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Return the manifest as two-space indented JSON."""
        return self.model_dump_json(indent=2, by_alias=True, exclude_none=True)
