"""SDK API version resolution.

The toolchain version a project is built with determines which device and
companion API versions the package declares. Patch and pre-release parts
of the toolchain version never change the API surface, so lookups are
keyed by the ``major.minor.0`` SDK version.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass

from wristpack_core.errors import VersionResolutionError

logger = logging.getLogger(__name__)

DEFAULT_TOOLCHAIN_VERSION = "4.0.0"
"""Toolchain version assumed when a project does not configure one."""

PROPOSED_API_VERSION = "*"
"""API version declared when building against proposed APIs."""

SEMVER_PATTERN = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


@dataclass(frozen=True)
class ApiVersions:
    """Device and companion API versions for one SDK version."""

    device_api: str
    companion_api: str


DEFAULT_API_VERSIONS: Mapping[str, ApiVersions] = {
    "3.1.0": ApiVersions(device_api="4.0.0", companion_api="2.1.0"),
    "4.0.0": ApiVersions(device_api="5.0.0", companion_api="3.0.0"),
}
"""Known SDK version to API version mappings."""


def sdk_version(toolchain_version: str) -> str:
    """Convert a toolchain version to its SDK version.

    Args:
        toolchain_version: Semver string, e.g. "4.0.5-pre.7".

    Returns:
        SDK version with patch and pre-release dropped, e.g. "4.0.0".

    Raises:
        VersionResolutionError: If the version is not valid semver.

    Example:
        >>> sdk_version("4.0.5-pre.7")
        '4.0.0'
    """
    match = SEMVER_PATTERN.match(toolchain_version.strip())
    if match is None:
        raise VersionResolutionError(
            toolchain_version,
            internal_details=f"'{toolchain_version}' is not a semantic version",
        )
    return f"{int(match['major'])}.{int(match['minor'])}.0"


class ApiVersionResolver:
    """Resolve toolchain versions to SDK API versions.

    Attributes:
        table: Mapping from SDK version ("major.minor.0") to ApiVersions.

    Example:
        >>> resolver = ApiVersionResolver()
        >>> resolver.resolve("4.0.100")
        ApiVersions(device_api='5.0.0', companion_api='3.0.0')
    """

    def __init__(self, table: Mapping[str, ApiVersions] | None = None) -> None:
        self.table = DEFAULT_API_VERSIONS if table is None else table

    def resolve(
        self,
        toolchain_version: str,
        *,
        enable_proposed_api: bool = False,
    ) -> ApiVersions:
        """Resolve API versions for a toolchain version.

        Args:
            toolchain_version: Configured toolchain version.
            enable_proposed_api: When True, both APIs resolve to "*" and the
                version is not looked up.

        Returns:
            ApiVersions for the toolchain version.

        Raises:
            VersionResolutionError: If the version has no known mapping.
        """
        if enable_proposed_api:
            return ApiVersions(
                device_api=PROPOSED_API_VERSION,
                companion_api=PROPOSED_API_VERSION,
            )

        version = sdk_version(toolchain_version)
        try:
            resolved = self.table[version]
        except KeyError as e:
            raise VersionResolutionError(
                toolchain_version,
                internal_details=f"known SDK versions: {', '.join(sorted(self.table))}",
            ) from e

        logger.debug("Resolved API versions for SDK %s", version)
        return resolved
