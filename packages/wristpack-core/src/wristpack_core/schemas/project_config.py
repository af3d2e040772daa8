"""Project configuration model for wristpack.

This module defines ProjectConfig, the validated form of ``wristpack.yaml``.
The manifest stage only reads it: application type, tile declarations,
requested permissions, the application identifier and the toolchain
version used to resolve SDK API versions.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from wristpack_core.compat.sdk_version import DEFAULT_TOOLCHAIN_VERSION
from wristpack_core.errors import ConfigurationError

PROJECT_FILE_NAME = "wristpack.yaml"
"""Default project configuration file name."""

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"


class AppType(str, Enum):
    """Kind of package being built."""

    APP = "app"
    CLOCKFACE = "clockface"


class TileDeclaration(BaseModel):
    """A tile declared by the project.

    Attributes:
        name: Display name of the tile.
        id: Tile identifier (UUID).
        build_targets: Device families the tile is restricted to. When
            omitted the tile applies to every family in the build.

    Example:
        >>> tile = TileDeclaration(
        ...     name="Clock",
        ...     id="2d0d5c76-7c8a-4c36-9f3e-2e2a3b3c4d5e",
        ...     build_targets=["ionic"],
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        description="Tile display name",
    )
    id: str = Field(
        ...,
        min_length=1,
        description="Tile identifier",
    )
    build_targets: list[str] | None = Field(
        default=None,
        description="Device families the tile is restricted to",
    )


class ProjectConfig(BaseModel):
    """Root configuration model for wristpack.yaml.

    Attributes:
        app_type: Kind of package (app or clockface).
        app_id: Application identifier, copied into the manifest as ``appId``.
        requested_permissions: Permissions copied into the manifest verbatim.
        tiles: Tile declarations (only used for apps).
        toolchain_version: Toolchain version used to resolve SDK API versions.
        enable_proposed_api: Build against proposed (unversioned) APIs.

    Example:
        >>> config = ProjectConfig(
        ...     app_id="b4ae822e-eca9-4fcb-8747-217f2a1f53a1",
        ...     requested_permissions=["access_location"],
        ... )
        >>> config.app_type
        <AppType.APP: 'app'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    app_type: AppType = Field(
        default=AppType.APP,
        description="Kind of package being built",
    )
    app_id: str = Field(
        ...,
        pattern=UUID_PATTERN,
        description="Application identifier (UUID)",
    )
    requested_permissions: list[str] = Field(
        default_factory=list,
        description="Permissions requested by the application",
    )
    tiles: list[TileDeclaration] = Field(
        default_factory=list,
        description="Tile declarations",
    )
    toolchain_version: str = Field(
        default=DEFAULT_TOOLCHAIN_VERSION,
        min_length=1,
        description="Toolchain version (semver)",
    )
    enable_proposed_api: bool = Field(
        default=False,
        description="Build against proposed APIs",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProjectConfig:
        """Load and validate ProjectConfig from a YAML (or JSON) file.

        Args:
            path: Path to wristpack.yaml.

        Returns:
            Validated ProjectConfig instance.

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
