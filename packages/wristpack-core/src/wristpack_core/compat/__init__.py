"""Compatibility collaborators consumed by the manifest stage.

- Capability lookup keyed by device family
- API version resolution keyed by toolchain version
"""

from __future__ import annotations

from wristpack_core.compat.capabilities import (
    DEFAULT_CAPABILITIES,
    CapabilityLookup,
    TableCapabilityLookup,
)
from wristpack_core.compat.sdk_version import (
    DEFAULT_API_VERSIONS,
    DEFAULT_TOOLCHAIN_VERSION,
    PROPOSED_API_VERSION,
    ApiVersionResolver,
    ApiVersions,
    sdk_version,
)

__all__: list[str] = [
    # Capabilities
    "CapabilityLookup",
    "TableCapabilityLookup",
    "DEFAULT_CAPABILITIES",
    # API versions
    "ApiVersionResolver",
    "ApiVersions",
    "sdk_version",
    "DEFAULT_API_VERSIONS",
    "DEFAULT_TOOLCHAIN_VERSION",
    "PROPOSED_API_VERSION",
]
